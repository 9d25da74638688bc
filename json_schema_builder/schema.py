"""
Programmatic builder for JSON Schema draft-04 documents.

A SchemaNode holds the keyword values of one schema object. Values are
checked when they are set, so projecting a node to JSON never fails.
Nodes nest through properties, items, definitions and the combinator
keywords; the same node may be attached to several parents.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from typing import Any

from .config import SerializerConfig
from .errors import InvalidSchemaValueError, SchemaTypeError
from .patterns import compile_pattern

logger = logging.getLogger(__name__)

DRAFT_04_URI = "http://json-schema.org/draft-04/schema#"

PRIMITIVE_TYPES = ("null", "boolean", "object", "array", "number", "integer", "string")


class _Unset:
    """Marker for keywords that were never set."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# Output key -> attribute, in the order keys are emitted.
# "$schema" is handled separately since it depends on the include_schema flag.
CANONICAL_ORDER: tuple[tuple[str, str], ...] = (
    ("title", "_title"),
    ("description", "_description"),
    ("type", "_type"),
    ("allOf", "_all_of"),
    ("anyOf", "_any_of"),
    ("oneOf", "_one_of"),
    ("not", "_not"),
    ("minimum", "_minimum"),
    ("properties", "_properties"),
    ("required", "_required"),
    ("exclusiveMinimum", "_exclusive_minimum"),
    ("items", "_items"),
    ("maxItems", "_max_items"),
    ("minItems", "_min_items"),
    ("uniqueItems", "_unique_items"),
    ("$ref", "_ref"),
    ("definitions", "_definitions"),
    ("format", "_format"),
    ("patternProperties", "_pattern_properties"),
    ("additionalProperties", "_additional_properties"),
    ("pattern", "_pattern"),
    ("maximum", "_maximum"),
    ("exclusiveMaximum", "_exclusive_maximum"),
    ("minLength", "_min_length"),
    ("maxLength", "_max_length"),
    ("enum", "_enum"),
)


def _require_node(value: Any, keyword: str) -> SchemaNode:
    if not isinstance(value, SchemaNode):
        raise SchemaTypeError(f"{keyword} must be a SchemaNode, got {type(value).__name__}")
    return value


def _require_instance(value: Any, types: tuple[type, ...], keyword: str, expected: str) -> None:
    # bool is an int subclass but never a valid count or bound
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
        raise SchemaTypeError(f"{keyword} must be {expected}, got {type(value).__name__}")


def _require_count(value: int, keyword: str) -> None:
    _require_instance(value, (int,), keyword, "an integer")
    if value < 0:
        logger.debug("Rejected negative %s: %r", keyword, value)
        raise InvalidSchemaValueError(f"{keyword} must be greater than or equal to 0, got {value}")


def _require_bound(value: int | float, keyword: str) -> None:
    _require_instance(value, (int, float), keyword, "a number")
    if not math.isfinite(value):
        logger.debug("Rejected non-finite %s: %r", keyword, value)
        raise InvalidSchemaValueError(f"{keyword} must be a finite number, got {value}")


def _project(value: Any) -> Any:
    """Project a stored keyword value into plain JSON-compatible data."""
    if isinstance(value, SchemaNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_project(item) for item in value]
    if isinstance(value, dict):
        return {key: _project(item) for key, item in value.items()}
    return value


class SchemaNode:
    """One JSON Schema object: the document root or any nested sub-schema.

    Keywords are set through the mutator methods below. A keyword that was
    never set is left out of the output. ``to_json`` emits present keywords
    in a fixed canonical order, whatever order the mutators were called in.

    Example:
        >>> name = SchemaNode()
        >>> name.set_type("string")
        >>> person = SchemaNode(include_schema=True)
        >>> person.add_property("name", name, required=True)
        >>> person.to_json()
        '{"$schema":"http://json-schema.org/draft-04/schema#","properties":{"name":{"type":"string"}},"required":["name"]}'
    """

    def __init__(self, include_schema: bool = False):
        """
        Args:
            include_schema: Emit the draft-04 ``$schema`` URI. Only meaningful
                on the document root.
        """
        self._include_schema = include_schema

        self._title = UNSET
        self._description = UNSET
        self._type = UNSET
        self._all_of = UNSET
        self._any_of = UNSET
        self._one_of = UNSET
        self._not = UNSET
        self._minimum = UNSET
        self._exclusive_minimum = UNSET
        self._maximum = UNSET
        self._exclusive_maximum = UNSET
        self._properties = UNSET
        self._required = UNSET
        self._items = UNSET
        self._min_items = UNSET
        self._max_items = UNSET
        self._unique_items = UNSET
        self._ref = UNSET
        self._definitions = UNSET
        self._format = UNSET
        self._pattern_properties = UNSET
        self._additional_properties = UNSET
        self._pattern = UNSET
        self._min_length = UNSET
        self._max_length = UNSET
        self._enum = UNSET

    @property
    def include_schema(self) -> bool:
        return self._include_schema

    # -- plain setters -------------------------------------------------------

    def set_title(self, title: str) -> None:
        _require_instance(title, (str,), "title", "a string")
        self._title = title

    def set_description(self, description: str) -> None:
        _require_instance(description, (str,), "description", "a string")
        self._description = description

    def set_format(self, format: str) -> None:
        _require_instance(format, (str,), "format", "a string")
        self._format = format

    def set_pattern(self, pattern: str) -> None:
        _require_instance(pattern, (str,), "pattern", "a string")
        self._pattern = pattern

    def set_ref(self, ref: str) -> None:
        """Set the reference URI, emitted under the ``$ref`` key."""
        _require_instance(ref, (str,), "$ref", "a string")
        self._ref = ref

    def set_unique_items(self, unique_items: bool) -> None:
        _require_instance(unique_items, (bool,), "uniqueItems", "a bool")
        self._unique_items = unique_items

    def set_exclusive_minimum(self, exclusive_minimum: bool) -> None:
        _require_instance(exclusive_minimum, (bool,), "exclusiveMinimum", "a bool")
        self._exclusive_minimum = exclusive_minimum

    def set_exclusive_maximum(self, exclusive_maximum: bool) -> None:
        _require_instance(exclusive_maximum, (bool,), "exclusiveMaximum", "a bool")
        self._exclusive_maximum = exclusive_maximum

    def set_min_items(self, min_items: int) -> None:
        """
        Raises:
            InvalidSchemaValueError: If min_items is negative
        """
        _require_count(min_items, "minItems")
        self._min_items = min_items

    # -- validated setters ---------------------------------------------------

    def set_type(self, type: str | list[str]) -> None:
        """Set the primitive type, or a list of allowed primitive types.

        Raises:
            InvalidSchemaValueError: If any value is not a draft-04 primitive type.
                Nothing is stored in that case.
        """
        values = list(type) if isinstance(type, (list, tuple)) else [type]
        for value in values:
            if value not in PRIMITIVE_TYPES:
                logger.debug("Rejected type %r", value)
                raise InvalidSchemaValueError(f"Type must be null, boolean, object, array, number, integer or string, got {value!r}")
        self._type = values if isinstance(type, (list, tuple)) else type

    def set_minimum(self, minimum: int | float, exclusive_minimum: bool = False) -> None:
        """Set the lower bound together with its exclusivity flag.

        Raises:
            InvalidSchemaValueError: If minimum is NaN or infinite
        """
        _require_bound(minimum, "minimum")
        _require_instance(exclusive_minimum, (bool,), "exclusiveMinimum", "a bool")
        self._minimum = minimum
        self._exclusive_minimum = exclusive_minimum

    def set_maximum(self, maximum: int | float, exclusive_maximum: bool = False) -> None:
        """Set the upper bound together with its exclusivity flag.

        Raises:
            InvalidSchemaValueError: If maximum is NaN or infinite
        """
        _require_bound(maximum, "maximum")
        _require_instance(exclusive_maximum, (bool,), "exclusiveMaximum", "a bool")
        self._maximum = maximum
        self._exclusive_maximum = exclusive_maximum

    def set_min_length(self, min_length: int) -> None:
        _require_count(min_length, "minLength")
        self._min_length = min_length

    def set_max_length(self, max_length: int) -> None:
        _require_count(max_length, "maxLength")
        self._max_length = max_length

    def set_items(
        self,
        items: SchemaNode | list[SchemaNode],
        unique_items: bool = False,
        min_items: int | None = None,
        max_items: int | None = None,
    ) -> None:
        """Set the item schema of an array.

        A list of nodes validates array elements positionally (tuple form).
        ``uniqueItems`` is always stored, so calling this method always emits it.

        Raises:
            InvalidSchemaValueError: If min_items or max_items is negative
        """
        if min_items is not None:
            _require_count(min_items, "minItems")
        if max_items is not None:
            _require_count(max_items, "maxItems")
        _require_instance(unique_items, (bool,), "uniqueItems", "a bool")
        if isinstance(items, (list, tuple)):
            items = [_require_node(item, "items") for item in items]
        else:
            _require_node(items, "items")

        self._items = items
        self._unique_items = unique_items
        if min_items is not None:
            self._min_items = min_items
        if max_items is not None:
            self._max_items = max_items

    def set_enum(self, values: list[Any]) -> None:
        """Set the allowed values. ``None`` members are emitted as ``null``.

        Raises:
            SchemaTypeError: If values is not a list or tuple, or holds a value
                JSON cannot represent (a set, an arbitrary object)
            InvalidSchemaValueError: If values holds NaN or infinity
        """
        if not isinstance(values, (list, tuple)):
            raise SchemaTypeError(f"enum must be a list, got {type(values).__name__}")
        try:
            json.dumps(values, allow_nan=False)
        except TypeError as e:
            raise SchemaTypeError(f"enum values must be JSON values: {e}") from e
        except ValueError as e:
            raise InvalidSchemaValueError(f"enum values must be JSON values: {e}") from e
        self._enum = copy.deepcopy(list(values))

    def set_additional_properties(self, additional_properties: bool | SchemaNode) -> None:
        """
        Raises:
            InvalidSchemaValueError: If the value is neither a bool nor a SchemaNode
        """
        if not isinstance(additional_properties, (bool, SchemaNode)):
            logger.debug("Rejected additionalProperties %r", additional_properties)
            raise InvalidSchemaValueError("additionalProperties must be a bool or a SchemaNode")
        self._additional_properties = additional_properties

    def set_not(self, node: SchemaNode) -> None:
        self._not = _require_node(node, "not")

    # -- collections ---------------------------------------------------------

    def add_property(self, name: str, node: SchemaNode, required: bool = False) -> None:
        """Register a property schema; a repeated name replaces the earlier one.

        When ``required`` is set the name is appended to ``required`` unless it
        is already listed there.
        """
        _require_instance(name, (str,), "property name", "a string")
        _require_node(node, "properties")
        if self._properties is UNSET:
            self._properties = {}
        self._properties[name] = node

        if required:
            if self._required is UNSET:
                self._required = []
            if name not in self._required:
                self._required.append(name)

    def add_pattern_property(self, regex: str, node: SchemaNode) -> None:
        """Register a schema for property names matching a delimited regex.

        Raises:
            InvalidSchemaValueError: If the regex does not compile
        """
        _require_instance(regex, (str,), "patternProperties key", "a string")
        _require_node(node, "patternProperties")
        compile_pattern(regex)
        if self._pattern_properties is UNSET:
            self._pattern_properties = {}
        self._pattern_properties[regex] = node

    def add_definition(self, name: str, node: SchemaNode) -> None:
        _require_instance(name, (str,), "definition name", "a string")
        _require_node(node, "definitions")
        if self._definitions is UNSET:
            self._definitions = {}
        self._definitions[name] = node

    def add_all_of(self, node: SchemaNode) -> None:
        self._all_of = self._append(self._all_of, node, "allOf")

    def add_any_of(self, node: SchemaNode) -> None:
        self._any_of = self._append(self._any_of, node, "anyOf")

    def add_one_of(self, node: SchemaNode) -> None:
        self._one_of = self._append(self._one_of, node, "oneOf")

    @staticmethod
    def _append(current: Any, node: SchemaNode, keyword: str) -> list[SchemaNode]:
        _require_node(node, keyword)
        nodes = [] if current is UNSET else current
        nodes.append(node)
        return nodes

    # -- serialization -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Project this node and its sub-schemas into an ordered dictionary.

        Only keywords that were set are present; keys follow CANONICAL_ORDER.
        """
        result: dict[str, Any] = {}
        if self._include_schema:
            result["$schema"] = DRAFT_04_URI

        for key, attribute in CANONICAL_ORDER:
            value = getattr(self, attribute)
            if value is not UNSET:
                result[key] = _project(value)
        return result

    def to_json(self, pretty: bool = False, config: SerializerConfig | None = None) -> str:
        """Encode this node as JSON text.

        Args:
            pretty: Indent the output. Overrides ``config.pretty`` when set.
            config: Encoding options; defaults to compact ASCII output

        Returns:
            The JSON document. Forward slashes are never escaped.
        """
        config = config or SerializerConfig()
        if pretty or config.pretty:
            return json.dumps(self.to_dict(), indent=config.indent, ensure_ascii=config.ensure_ascii, allow_nan=False)
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=config.ensure_ascii, allow_nan=False)

    def __repr__(self) -> str:
        return f"SchemaNode({self.to_dict()!r})"
