"""
TypeNode definitions for compiled schema fragments.

Each node wraps one schema fragment. Nodes are created empty by the
Registry, filled in during construction, and get their inline_text and
block_text during conversion. A node graph lives for exactly one compile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .errors import SchemaUnsupported

# Composite keywords and the operator combining their members, in the
# order they are applied
COMPOSITE_OPERATORS = (("allOf", "&"), ("anyOf", "|"), ("oneOf", "|"))


class RenderMode(Enum):
    """How a node appears in the output."""

    INLINE = "inline"  # Only ever embedded in a parent's expression
    BLOCK = "block"  # Owns a standalone named declaration


@dataclass(eq=False)
class Augmentation:
    """Members of one allOf/anyOf/oneOf keyword combined with an operator."""

    operator: str = "&"
    members: list[TypeNode] = field(default_factory=list)


@dataclass(eq=False)
class TypeNode:
    """Base class for all compiled nodes."""

    schema: dict[str, Any] = field(default_factory=dict)

    # Location in the source document (for error messages)
    path: str = "#"

    display_name: str = ""
    render_mode: RenderMode = RenderMode.INLINE
    augmentations: list[Augmentation] = field(default_factory=list)

    # Filled in by conversion
    inline_text: str | None = None
    block_text: str | None = None

    @property
    def is_block(self) -> bool:
        return self.render_mode is RenderMode.BLOCK


@dataclass(eq=False)
class PrimitiveNode(TypeNode):
    """A type rendered as a fixed literal."""

    literal: ClassVar[str] = ""


@dataclass(eq=False)
class NumberNode(PrimitiveNode):
    literal: ClassVar[str] = "number"


@dataclass(eq=False)
class StringNode(PrimitiveNode):
    literal: ClassVar[str] = "string"


@dataclass(eq=False)
class BooleanNode(PrimitiveNode):
    literal: ClassVar[str] = "boolean"


@dataclass(eq=False)
class NullNode(PrimitiveNode):
    """Contributes no text; dropped from unions and type lists."""

    literal: ClassVar[str] = ""


@dataclass(eq=False)
class ArrayNode(TypeNode):
    items: TypeNode | None = None


@dataclass(eq=False)
class TypeListNode(TypeNode):
    """A `type` keyword given as a list of primitive type names."""

    alternatives: list[TypeNode] = field(default_factory=list)


@dataclass(eq=False)
class FieldDef:
    """A property of an object."""

    name: str = ""
    type_node: TypeNode | None = None
    required: bool = False


@dataclass(eq=False)
class ObjectNode(TypeNode):
    fields: list[FieldDef] = field(default_factory=list)


@dataclass(eq=False)
class CompositeNode(TypeNode):
    """A bare allOf/anyOf/oneOf with no base type of its own."""

    pass


@dataclass(eq=False)
class RefNode(TypeNode):
    """Points at another registered node by its registry key."""

    ref: str = ""
    target_id: str = ""


PRIMITIVE_NODES: dict[str, type[PrimitiveNode]] = {
    "string": StringNode,
    "number": NumberNode,
    "integer": NumberNode,
    "boolean": BooleanNode,
    "null": NullNode,
}


def has_composite(schema: dict[str, Any]) -> bool:
    """Check whether a schema carries any allOf/anyOf/oneOf keyword."""
    return any(keyword in schema for keyword, _ in COMPOSITE_OPERATORS)


def classify(schema: dict[str, Any], path: str = "#") -> type[TypeNode]:
    """
    Pick the node variant for a schema fragment.

    The first matching rule wins, since a schema may satisfy several.

    Args:
        schema: The schema fragment
        path: Location of the fragment (for error messages)

    Returns:
        The TypeNode subclass to instantiate

    Raises:
        SchemaUnsupported: If no rule matches
    """
    if not isinstance(schema, dict):
        raise SchemaUnsupported(schema, path)

    if "$ref" in schema:
        return RefNode

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        return TypeListNode

    if isinstance(schema_type, str) and schema_type in PRIMITIVE_NODES:
        return PRIMITIVE_NODES[schema_type]

    if schema_type == "array" or "items" in schema:
        return ArrayNode

    if schema_type == "object" or "properties" in schema:
        return ObjectNode

    if has_composite(schema):
        return CompositeNode

    raise SchemaUnsupported(schema, path)
