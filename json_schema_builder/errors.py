"""
Exceptions raised while building and writing schema documents.
"""


class SchemaError(Exception):
    """Base class for every error raised by json_schema_builder."""


class InvalidSchemaValueError(SchemaError, ValueError):
    """Raised when a mutator receives a value outside the keyword's range.

    This can happen when:
    - A type name is not one of the draft-04 primitive types
    - A count bound (minItems, maxItems, minLength, maxLength) is negative
    - A patternProperties key does not compile as a regular expression
    - additionalProperties is neither a bool nor a SchemaNode
    """


class SchemaTypeError(SchemaError, TypeError):
    """Raised when an argument has the wrong shape, e.g. a scalar passed as enum."""
