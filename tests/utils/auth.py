from jose import jwt

from catalog.core.config import settings
from catalog.schemas.token import TokenPayload


def get_admin_authentication_headers(user_id: str = "admin_test") -> dict[str, str]:
    """
    Generates a valid admin JWT and the matching Authorization header.
    """
    return get_authentication_headers(user_id=user_id, role=settings.ADMIN_ROLE)


def get_authentication_headers(user_id: str = "user_test", role: str = "agent") -> dict[str, str]:
    payload = TokenPayload(sub=user_id, role=role, exp=9999999999)  # High expiration for tests
    token = jwt.encode(
        payload.model_dump(), settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )
    return {"Authorization": f"Bearer {token}"}
