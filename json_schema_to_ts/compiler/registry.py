"""
Registry that compiles schemas into TypeScript declarations.

Compilation runs in three stages:

1. Construction: classify every queued root schema into a TypeNode graph,
   loading $ref targets on the way. Nodes are registered by id (and by
   the location they were loaded from) before their children are built,
   so references back into a schema under construction find it.
2. Conversion: compute inline and block text depth-first, memoized by
   node identity. A named node publishes its name before converting its
   children, which is what lets reference cycles terminate.
3. Render: concatenate the declarations, dropping later duplicates of an
   already emitted name.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from pathlib import Path
from typing import Any

from ..utils import tsify_string
from .config import CompilerConfig
from .errors import SchemaMissingIdentifier, SchemaUnsupported
from .loader import FileSchemaLoader, SchemaLoader
from .nodes import (
    COMPOSITE_OPERATORS,
    ArrayNode,
    Augmentation,
    CompositeNode,
    FieldDef,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    RenderMode,
    TypeListNode,
    TypeNode,
    classify,
    has_composite,
)
from .renderer import TypeScriptRenderer

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def _title(schema: dict[str, Any]) -> str | None:
    """The schema's title, if it is a string; other values leave the schema anonymous."""
    title = schema.get("title")
    return title if isinstance(title, str) else None


class Registry:
    """Compiles one or more root schemas into a single declarations text.

    A Registry owns its whole node graph and lives for one compile:
    call add_schema() for every root document, then parse() once.
    """

    def __init__(
        self,
        config: CompilerConfig | None = None,
        loader: SchemaLoader | None = None,
        command_line: str = "",
    ):
        """
        Initialize the registry.

        Args:
            config: Compiler configuration
            loader: Source for $ref targets (defaults to reading JSON files)
            command_line: Shown in the generation comment, if enabled
        """
        self.config = config or CompilerConfig()
        self.loader = loader or FileSchemaLoader()
        self.renderer = TypeScriptRenderer(self.config.indent)
        self.command_line = command_line

        # Root schemas not yet constructed
        self.pending: deque[dict[str, Any]] = deque()

        # Schema id or $ref location -> node
        self.resolved_by_id: dict[str, TypeNode] = {}

        # Block nodes in the order their conversion started
        self.emission_order: list[TypeNode] = []

        # Nodes whose conversion has started
        self.converted: set[TypeNode] = set()

    def add_schema(self, schema: dict[str, Any], name: str | None = None) -> None:
        """
        Queue a root schema.

        Args:
            schema: The schema document
            name: Declaration name, overriding the schema's own title
        """
        if name:
            schema = {**schema, "title": name}
        self.pending.append(schema)
        logger.debug("Queued root schema #%d", len(self.pending))

    def parse(self) -> str:
        """Compile every queued schema and return the declarations text."""
        roots = []
        while self.pending:
            schema = self.pending.popleft()
            node = self.parse_schema(schema)
            if not node.display_name:
                raise SchemaMissingIdentifier(schema, node.path)
            roots.append(node)

        for node in roots:
            self.convert(node)

        return self.render()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def parse_schema(
        self,
        schema: dict[str, Any],
        name: str | None = None,
        path: str = "#",
        keys: tuple[str, ...] = (),
    ) -> TypeNode:
        """
        Build the node for a schema fragment, recursing into its children.

        Args:
            schema: The schema fragment
            name: Name inherited from the enclosing property, if any
            path: Location of the fragment (for error messages)
            keys: Extra registry keys for this node (e.g. its $ref location)

        Returns:
            The new node, or the already registered node for the schema's id
        """
        schema_id = schema.get("id") if isinstance(schema, dict) else None
        if not isinstance(schema_id, str):
            schema_id = None
        if schema_id and schema_id in self.resolved_by_id:
            return self.resolved_by_id[schema_id]

        node_class = classify(schema, path)
        title = _title(schema)
        node = node_class(
            schema=schema,
            path=path,
            display_name=tsify_string(title or name),
            render_mode=self._render_mode(node_class, schema, name),
        )

        for key in (schema_id, *keys):
            if key:
                self.resolved_by_id[key] = node
                logger.debug("Registered %s as %r", path, key)

        self._build(node, name)
        node.augmentations = self._build_augmentations(schema, path)
        return node

    def _render_mode(self, node_class: type[TypeNode], schema: dict[str, Any], name: str | None) -> RenderMode:
        """Titled schemas are declared; inherited names only declare objects and composites."""
        if tsify_string(_title(schema)):
            return RenderMode.BLOCK
        if tsify_string(name) and (issubclass(node_class, (ObjectNode, CompositeNode)) or has_composite(schema)):
            return RenderMode.BLOCK
        return RenderMode.INLINE

    def _build(self, node: TypeNode, name: str | None) -> None:
        schema = node.schema
        match node:
            case RefNode():
                self._build_reference(node)
            case TypeListNode():
                node.alternatives = [
                    self.parse_schema({"type": entry}, path=f"{node.path}/type/{i}") for i, entry in enumerate(schema["type"])
                ]
            case ArrayNode():
                node.items = self.parse_schema(schema.get("items", {}), name, f"{node.path}/items")
            case ObjectNode():
                required = schema.get("required", [])
                required = set(required) if isinstance(required, list) else set()
                for prop_name, prop_schema in schema.get("properties", {}).items():
                    type_node = self.parse_schema(prop_schema, prop_name, f"{node.path}/properties/{prop_name}")
                    node.fields.append(FieldDef(prop_name, type_node, prop_name in required))

    def _build_reference(self, node: RefNode) -> None:
        ref = node.schema["$ref"]
        if not isinstance(ref, str):
            raise SchemaUnsupported(node.schema, node.path)

        key = ref if ref in self.resolved_by_id else self._locate(ref)
        if key not in self.resolved_by_id:
            logger.debug("Resolving $ref %r from %s", ref, key)
            document = self.loader.load(key)
            target = self.parse_schema(document, path=f"{key}#", keys=(key,))
            self.resolved_by_id.setdefault(key, target)

        target = self.resolved_by_id[key]
        if not target.display_name:
            raise SchemaMissingIdentifier(target.schema, target.path)

        node.ref = ref
        node.target_id = key

    def _locate(self, ref: str) -> str:
        """Join the configured root directory onto a $ref path."""
        if not self.config.root_dir:
            return ref
        return str(Path(self.config.root_dir) / ref)

    def _build_augmentations(self, schema: dict[str, Any], path: str) -> list[Augmentation]:
        augmentations = []
        for keyword, operator in COMPOSITE_OPERATORS:
            if keyword not in schema:
                continue
            members = schema[keyword]
            if not isinstance(members, list):
                raise SchemaUnsupported(schema, f"{path}/{keyword}")
            augmentations.append(
                Augmentation(
                    operator=operator,
                    members=[self.parse_schema(member, path=f"{path}/{keyword}/{i}") for i, member in enumerate(members)],
                )
            )
        return augmentations

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(self, node: TypeNode) -> None:
        """
        Fill in a node's inline text, and its block text if it is declared.

        Idempotent: a node already converted, or being converted further up
        the stack, is left alone.
        """
        if node in self.converted:
            return
        self.converted.add(node)

        if node.is_block:
            node.inline_text = node.display_name
            self.emission_order.append(node)
            logger.debug("Declaring %s from %s", node.display_name, node.path)

        augmentation = self._convert_augmentations(node)
        expression = self._inline(node, augmentation)

        if node.is_block:
            node.block_text = self._blockify(node, expression, augmentation)
        elif augmentation and not isinstance(node, CompositeNode):
            node.inline_text = f"{expression} & ({augmentation})" if expression else augmentation
        else:
            node.inline_text = expression

    def _convert_augmentations(self, node: TypeNode) -> str:
        """Join the members of each composite keyword; null members contribute nothing."""
        groups = []
        for augmentation in node.augmentations:
            texts = []
            for member in augmentation.members:
                self.convert(member)
                if member.inline_text:
                    texts.append(member.inline_text)
            if texts:
                groups.append(f" {augmentation.operator} ".join(texts))

        if len(groups) > 1:
            return " & ".join(f"({group})" for group in groups)
        return groups[0] if groups else ""

    def _inline(self, node: TypeNode, augmentation: str) -> str:
        match node:
            case PrimitiveNode():
                return node.literal
            case ArrayNode():
                self.convert(node.items)
                item = self._embed(node.items)
                if _WHITESPACE.search(item) and not item.endswith("}"):
                    item = f"({item})"
                return f"{item}[]"
            case TypeListNode():
                literals = []
                for alternative in node.alternatives:
                    self.convert(alternative)
                    if alternative.inline_text:
                        literals.append(alternative.inline_text)
                return " | ".join(literals)
            case ObjectNode():
                fields = []
                for field_def in node.fields:
                    self.convert(field_def.type_node)
                    fields.append(
                        {
                            "name": field_def.name,
                            "type": self._embed(field_def.type_node),
                            "required": field_def.required,
                        }
                    )
                return self.renderer.object_type(fields)
            case RefNode():
                target = self.resolved_by_id[node.target_id]
                self.convert(target)
                if target.inline_text is None:
                    # Recursion back into an anonymous type cannot be expressed
                    raise SchemaMissingIdentifier(target.schema, target.path)
                return self._embed(target)
            case CompositeNode():
                return augmentation
        raise SchemaUnsupported(node.schema, node.path)

    @staticmethod
    def _embed(node: TypeNode) -> str:
        """Inline text for use as a field or array item type."""
        return node.inline_text or "null"

    def _blockify(self, node: TypeNode, expression: str, augmentation: str) -> str:
        name = node.display_name
        if isinstance(node, ObjectNode):
            if not augmentation:
                return self.renderer.interface(name, expression)
            # An interface cannot extend a union, so the shape gets a private name
            shape = f"_{name}"
            return "\n\n".join(
                [
                    self.renderer.interface(shape, expression),
                    self.renderer.alias(name, f"{shape} & ({augmentation})"),
                ]
            )

        if augmentation and not isinstance(node, CompositeNode):
            expression = f"{expression} & ({augmentation})" if expression else augmentation
        return self.renderer.alias(name, expression or "null")

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Concatenate declarations in emission order, first of each name wins."""
        blocks = []
        seen = set()
        for node in self.emission_order:
            if node.display_name in seen:
                logger.debug("Dropping duplicate declaration %s from %s", node.display_name, node.path)
                continue
            seen.add(node.display_name)
            blocks.append(node.block_text)

        if self.config.add_generation_comment:
            blocks.insert(0, self.renderer.header(self.command_line))
        return "\n\n".join(blocks)
