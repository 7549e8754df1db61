# tests/api/v1/test_attributes.py

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from catalog.crud import type_scope as crud_scope
from tests.utils.auth import get_admin_authentication_headers, get_authentication_headers
from tests.utils.catalog import create_attribute, create_property_type


def test_create_attribute(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    data = {"name": "Color", "data_type": "enum", "is_filterable": True, "options": ["red", "blue"]}

    response = client.post("/api/v1/attributes", headers=headers, json=data)

    assert response.status_code == 201
    content = response.json()
    assert content["id"].startswith("attr_")
    assert content["name"] == "Color"
    assert content["data_type"] == "enum"
    assert content["options"] == ["red", "blue"]


def test_create_enum_without_options_is_a_400(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    data = {"name": "Color", "data_type": "enum", "is_filterable": True, "options": []}

    response = client.post("/api/v1/attributes", headers=headers, json=data)

    assert response.status_code == 400
    content = response.json()
    assert content["error"]["category"] == "validation_error"
    assert content["error"]["field"] == "options"
    assert content["message"] == content["error"]["message"]


def test_malformed_body_uses_the_error_envelope(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()

    response = client.post(
        "/api/v1/attributes", headers=headers, json={"name": "Pool", "data_type": "number"}
    )

    assert response.status_code == 400
    content = response.json()
    assert content["error"]["category"] == "validation_error"
    assert content["error"]["path"] == "/api/v1/attributes"
    assert content["error"]["validation_errors"][0]["field"] == "body.data_type"
    assert content["message"].startswith("body.data_type:")


def test_duplicate_attribute_name_is_a_409(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    create_attribute(db, "Pool", "boolean")

    response = client.post(
        "/api/v1/attributes", headers=headers, json={"name": "POOL", "data_type": "boolean"}
    )

    assert response.status_code == 409
    assert response.json()["message"] == "An attribute named 'POOL' already exists"


def test_list_and_get_attributes(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    surface = create_attribute(db, "Surface", "decimal")
    create_attribute(db, "Color", "enum", options=["red"])

    response = client.get("/api/v1/attributes", headers=headers)
    assert response.status_code == 200
    assert [a["name"] for a in response.json()] == ["Color", "Surface"]

    response = client.get(f"/api/v1/attributes/{surface.id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["options"] == []

    response = client.get("/api/v1/attributes/attr_missing", headers=headers)
    assert response.status_code == 404
    assert response.json()["error"]["category"] == "not_found_error"


def test_update_attribute_returns_warnings(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    attr = create_attribute(db, "Color", "enum", options=["red", "blue"])

    response = client.put(
        f"/api/v1/attributes/{attr.id}",
        headers=headers,
        json={"options": ["blue", "green"]},
    )

    assert response.status_code == 200
    content = response.json()
    assert content["options"] == ["blue", "green"]
    assert content["warnings"] == []


def test_delete_linked_attribute_returns_reason(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    surface = create_attribute(db, "Surface", "decimal")
    villa = create_property_type(db, "Villa")
    crud_scope.set_scope(db, type_id=villa.id, attribute_ids=[surface.id])

    response = client.delete(f"/api/v1/attributes/{surface.id}", headers=headers)

    assert response.status_code == 409
    content = response.json()
    assert content["message"] == (
        "Cannot delete attribute 'Surface': it is configured on property type(s) Villa."
    )
    assert content["error"]["linked_types"] == [villa.id]

    usage = client.get(f"/api/v1/attributes/{surface.id}/usage", headers=headers).json()
    assert usage["in_use"] is True
    assert usage["linked_types"] == [{"id": villa.id, "name": "Villa"}]


def test_delete_unused_attribute(client: TestClient, db: Session) -> None:
    headers = get_admin_authentication_headers()
    pool = create_attribute(db, "Pool", "boolean")

    pool_id = pool.id
    response = client.delete(f"/api/v1/attributes/{pool_id}", headers=headers)

    assert response.status_code == 204
    assert client.get(f"/api/v1/attributes/{pool_id}", headers=headers).status_code == 404


def test_attributes_require_a_token(client: TestClient, db: Session) -> None:
    response = client.get("/api/v1/attributes")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    content = response.json()
    assert content["message"] == "Not authenticated"
    assert content["error"]["category"] == "authentication_error"


def test_invalid_token_is_a_401(client: TestClient, db: Session) -> None:
    headers = {"Authorization": "Bearer not-a-jwt"}
    response = client.get("/api/v1/attributes", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Could not validate credentials"


def test_attributes_require_admin_role(client: TestClient, db: Session) -> None:
    headers = get_authentication_headers(role="agent")
    response = client.get("/api/v1/attributes", headers=headers)

    assert response.status_code == 403
    content = response.json()
    assert content["message"] == "Admin privileges required"
    assert content["error"]["category"] == "authentication_error"
    assert content["error"]["path"] == "/api/v1/attributes"
