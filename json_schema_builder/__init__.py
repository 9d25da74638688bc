"""JSON Schema Builder

A Python package for building JSON Schema draft-04 documents programmatically
and serializing them with a canonical key order.
"""

import logging

__version__ = "1.0.0"

from .config import SerializerConfig
from .errors import InvalidSchemaValueError, SchemaError, SchemaTypeError
from .patterns import compile_pattern
from .schema import DRAFT_04_URI, PRIMITIVE_TYPES, SchemaNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "SchemaNode",
    "DRAFT_04_URI",
    "PRIMITIVE_TYPES",
    "SchemaError",
    "InvalidSchemaValueError",
    "SchemaTypeError",
    "SerializerConfig",
    "compile_pattern",
]
