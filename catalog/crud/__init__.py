# catalog/crud/__init__.py

from .crud_attribute import attribute
from .crud_property_type import property_type
from .crud_property_value import property_value
from .crud_type_scope import type_scope
