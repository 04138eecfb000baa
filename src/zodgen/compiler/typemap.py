"""Convert schema nodes into paired zod validators and TypeScript types.

:class:`TypeResolver` walks a :data:`~zodgen.models.SchemaNode` recursively
and produces a :class:`~zodgen.models.ResolvedType`: a zod expression that
checks values at runtime and a TypeScript type describing the same shape.
Both halves are built in parallel, so an optional property is optional in
both, an enum is a literal set in both, and so on.

References are never inlined. A :class:`~zodgen.models.ReferenceNode` becomes
the symbol ``<Name>Schema`` (validator) and ``<namespace><Name>`` (type), which
is what allows recursive and mutually referencing schemas to be emitted at
all; each name is defined once, on its own, in dependency order.

Composite schemas (``allOf``/``oneOf``/``anyOf``/``not``) and anything the
parser could not classify resolve to the permissive ``z.any()`` / ``any``
pair.

The resolver is pure: the same node structure always yields the same text.
"""

from __future__ import annotations

import json
from typing import Any

from zodgen.compiler.naming import property_key, schema_symbol, type_name
from zodgen.models import (
    ArrayNode,
    BooleanNode,
    CompositeNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    ResolvedType,
    SchemaNode,
    StringNode,
    UnknownNode,
)

PERMISSIVE = ResolvedType(validator="z.any()", type="any")
"""Accept-anything pair used for composites, unknown shapes and fallbacks."""

VOID = ResolvedType(validator="z.void()", type="void")
"""Pair for responses that declare no content."""

_INDENT = "  "


class TypeResolver:
    """Resolve schema nodes to :class:`~zodgen.models.ResolvedType` pairs.

    Args:
        namespace: Prefix for referenced type aliases. The schemas module
            refers to its own aliases bare (``""``); the endpoints module
            imports them as ``Schemas`` and passes ``"Schemas."``.
    """

    def __init__(self, namespace: str = "") -> None:
        self.namespace = namespace

    def resolve(self, node: SchemaNode) -> ResolvedType:
        """Return the validator/type pair for *node*."""
        return self._resolve(node, depth=1)

    def reference(self, name: str) -> ResolvedType:
        """Return the symbolic pair pointing at the named schema *name*."""
        return ResolvedType(
            validator=schema_symbol(name), type=f"{self.namespace}{type_name(name)}"
        )

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def _resolve(self, node: SchemaNode, depth: int) -> ResolvedType:
        if isinstance(node, StringNode):
            if node.format == "binary":
                resolved = ResolvedType(validator="z.instanceof(Blob)", type="Blob")
            else:
                resolved = ResolvedType(validator="z.string()", type="string")
        elif isinstance(node, NumberNode):
            validator = "z.number().int()" if node.integer else "z.number()"
            resolved = ResolvedType(validator=validator, type="number")
        elif isinstance(node, BooleanNode):
            resolved = ResolvedType(validator="z.boolean()", type="boolean")
        elif isinstance(node, EnumNode):
            resolved = self._enum(node.values)
        elif isinstance(node, ArrayNode):
            resolved = self._array(node, depth)
        elif isinstance(node, ObjectNode):
            resolved = self._object(node, depth)
        elif isinstance(node, ReferenceNode):
            resolved = self.reference(node.target)
        elif isinstance(node, (CompositeNode, UnknownNode)):
            resolved = PERMISSIVE
        else:
            raise TypeError(f"Unhandled schema node: {type(node).__name__}")

        if node.nullable and resolved is not PERMISSIVE:
            return ResolvedType(
                validator=f"{resolved.validator}.nullable()",
                type=f"{resolved.type} | null",
            )
        return resolved

    # ------------------------------------------------------------------ #
    # Variants
    # ------------------------------------------------------------------ #

    def _enum(self, values: tuple[Any, ...]) -> ResolvedType:
        if not all(isinstance(v, (str, int, float, bool)) for v in values):
            return PERMISSIVE

        literals = [json.dumps(v) for v in values]
        type_ = " | ".join(literals)
        if all(isinstance(v, str) for v in values):
            return ResolvedType(validator=f"z.enum([{', '.join(literals)}])", type=type_)
        if len(literals) == 1:
            return ResolvedType(validator=f"z.literal({literals[0]})", type=type_)
        members = ", ".join(f"z.literal({lit})" for lit in literals)
        return ResolvedType(validator=f"z.union([{members}])", type=type_)

    def _array(self, node: ArrayNode, depth: int) -> ResolvedType:
        items = self._resolve(node.items, depth)
        item_type = f"({items.type})" if " | " in items.type else items.type
        return ResolvedType(validator=f"z.array({items.validator})", type=f"{item_type}[]")

    def _object(self, node: ObjectNode, depth: int) -> ResolvedType:
        if not node.properties:
            values = (
                self._resolve(node.additional_properties, depth)
                if node.additional_properties is not None
                else PERMISSIVE
            )
            return ResolvedType(
                validator=f"z.record(z.string(), {values.validator})",
                type=f"Record<string, {values.type}>",
            )

        inner = _INDENT * depth
        outer = _INDENT * (depth - 1)
        shape: list[str] = []
        fields: list[str] = []
        for name, prop in node.properties.items():
            resolved = self._resolve(prop, depth + 1)
            key = property_key(name)
            if name in node.required:
                shape.append(f"{inner}{key}: {resolved.validator},")
                fields.append(f"{inner}{key}: {resolved.type};")
            else:
                shape.append(f"{inner}{key}: {resolved.validator}.optional(),")
                fields.append(f"{inner}{key}?: {resolved.type};")

        return ResolvedType(
            validator="z.object({\n" + "\n".join(shape) + f"\n{outer}}})",
            type="{\n" + "\n".join(fields) + f"\n{outer}}}",
        )
