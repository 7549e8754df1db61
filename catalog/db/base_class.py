# catalog/db/base_class.py

from sqlalchemy.orm import declarative_base

# Single declarative base; every catalog model inherits from it.
Base = declarative_base()
