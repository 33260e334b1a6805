"""
TypeScript text rendering.

All declaration text is produced from the jinja2 templates in
templates/typescript/, so the output shape lives in one place.
"""

from __future__ import annotations

import json
from pathlib import Path

import jinja2

from ..utils import is_identifier

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "typescript"


def property_name(name: str) -> str:
    """Quote a property name when it is not a valid identifier."""
    return name if is_identifier(name) else json.dumps(name)


class TypeScriptRenderer:
    """Renders object types, interfaces and type aliases."""

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        self.jinja_env.filters["property_name"] = property_name
        self.object_model = self._load("object")
        self.interface_model = self._load("interface")
        self.alias_model = self._load("alias")
        self.prefix = self._load("prefix")

    def _load(self, name: str) -> jinja2.Template:
        with open(TEMPLATES_DIR / f"{name}.ts.jinja2", encoding="utf-8") as f:
            return self.jinja_env.from_string(f.read())

    def object_type(self, fields: list[dict]) -> str:
        """
        Render an object type literal.

        Args:
            fields: One dict per property with "name", "type" and "required"

        Returns:
            The `{ ... }` expression, one property per line
        """
        return self.object_model.render(fields=fields, indent=self.indent)

    def interface(self, name: str, structure: str) -> str:
        return self.interface_model.render(name=name, structure=structure)

    def alias(self, name: str, expression: str) -> str:
        return self.alias_model.render(name=name, expression=expression)

    def header(self, command_line: str = "") -> str:
        """Render the generation comment placed above all declarations."""
        return self.prefix.render(command_line=command_line)
