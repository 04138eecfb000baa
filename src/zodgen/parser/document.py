"""Build a typed :class:`~zodgen.models.Document` from a raw OpenAPI dict.

The interesting part is :func:`parse_schema`, which classifies each raw
schema dict into exactly one :mod:`schema node <zodgen.models>` kind. The
kind is decided here, once, from the source shape:

1. ``$ref`` -- :class:`~zodgen.models.ReferenceNode` (the target is stored
   by name and never followed).
2. ``allOf`` / ``oneOf`` / ``anyOf`` / ``not`` --
   :class:`~zodgen.models.CompositeNode`.
3. ``enum`` -- :class:`~zodgen.models.EnumNode`.
4. ``type`` -- string, number/integer, boolean, array or object. A schema
   with ``properties`` or ``additionalProperties`` but no ``type`` is
   treated as an object.
5. Anything else -- :class:`~zodgen.models.UnknownNode`.

Malformed shapes (an array without ``items``, a non-dict schema, an
unrecognised ``type``) degrade to ``UnknownNode`` instead of failing the run.

Nullability is read from OpenAPI 3.0 ``nullable: true`` and from OpenAPI 3.1
type arrays such as ``["string", "null"]``.
"""

from __future__ import annotations

import logging
from typing import Any

from zodgen.models import (
    ArrayNode,
    BooleanNode,
    CompositeNode,
    Document,
    EnumNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaNode,
    StringNode,
    UnknownNode,
)
from zodgen.parser.resolver import ref_name

logger = logging.getLogger(__name__)

_COMPOSITIONS = ("allOf", "oneOf", "anyOf")


def build_document(raw_spec: dict[str, Any], openapi_version: str) -> Document:
    """Convert a loaded OpenAPI dict into a :class:`~zodgen.models.Document`.

    Args:
        raw_spec: The dict returned by :func:`~zodgen.parser.loader.load_spec`.
        openapi_version: The version string returned by
            :func:`~zodgen.parser.loader.validate_openapi_version`.

    Returns:
        A frozen document with typed schemas and raw paths.
    """
    info = raw_spec.get("info") or {}
    components = raw_spec.get("components") or {}
    raw_schemas = components.get("schemas") or {}

    paths = {
        path: item
        for path, item in (raw_spec.get("paths") or {}).items()
        if isinstance(item, dict)
    }

    return Document(
        title=str(info.get("title", "Untitled API")),
        version=str(info.get("version", "0.0.0")),
        openapi_version=openapi_version,
        servers=[
            str(server.get("url", "/"))
            for server in raw_spec.get("servers") or []
            if isinstance(server, dict)
        ],
        schemas={name: parse_schema(schema) for name, schema in raw_schemas.items()},
        paths=paths,
        components=components,
    )


def parse_schema(raw: Any) -> SchemaNode:
    """Classify a raw schema into its :data:`~zodgen.models.SchemaNode` variant.

    Args:
        raw: A schema object from the spec. Non-dict values are accepted and
            become :class:`~zodgen.models.UnknownNode`.

    Returns:
        The node. Never raises for malformed input.

    Example::

        node = parse_schema({"type": "array", "items": {"$ref": "#/components/schemas/Tag"}})
        # node == ArrayNode(items=ReferenceNode(target="Tag"))
    """
    if not isinstance(raw, dict):
        logger.debug("Schema is not an object (%r), treating as unknown", raw)
        return UnknownNode()

    ref = raw.get("$ref")
    if isinstance(ref, str):
        return ReferenceNode(target=ref_name(ref))

    schema_type, nullable = _read_type(raw)

    for composition in _COMPOSITIONS:
        members = raw.get(composition)
        if isinstance(members, list):
            return CompositeNode(
                composition=composition,
                members=tuple(parse_schema(member) for member in members),
                nullable=nullable,
            )
    if isinstance(raw.get("not"), dict):
        return CompositeNode(
            composition="not", members=(parse_schema(raw["not"]),), nullable=nullable
        )

    values = raw.get("enum")
    if isinstance(values, list) and values:
        if None in values:
            nullable = True
            values = [value for value in values if value is not None]
        if values:
            return EnumNode(values=tuple(values), nullable=nullable)

    if schema_type is None and ("properties" in raw or "additionalProperties" in raw):
        schema_type = "object"

    if schema_type == "string":
        return StringNode(format=raw.get("format"), nullable=nullable)
    if schema_type in ("number", "integer"):
        return NumberNode(integer=schema_type == "integer", nullable=nullable)
    if schema_type == "boolean":
        return BooleanNode(nullable=nullable)
    if schema_type == "array":
        items = raw.get("items")
        if not isinstance(items, dict):
            logger.debug("Array schema without items, treating as unknown")
            return UnknownNode(nullable=nullable)
        return ArrayNode(items=parse_schema(items), nullable=nullable)
    if schema_type == "object":
        return _parse_object(raw, nullable)

    if schema_type is not None:
        logger.debug("Unrecognised schema type %r, treating as unknown", schema_type)
    return UnknownNode(nullable=nullable)


def _read_type(raw: dict[str, Any]) -> tuple[str | None, bool]:
    """Return ``(type, nullable)`` for a schema dict.

    OpenAPI 3.1 allows ``type`` to be a list; the first non-null entry wins
    and a ``"null"`` entry marks the node nullable.
    """
    nullable = raw.get("nullable") is True
    type_value = raw.get("type")

    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        nullable = nullable or len(non_null) != len(type_value)
        type_value = non_null[0] if non_null else None

    if type_value is not None and not isinstance(type_value, str):
        return None, nullable
    return type_value, nullable


def _parse_object(raw: dict[str, Any], nullable: bool) -> ObjectNode:
    properties = raw.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    required = raw.get("required")
    if not isinstance(required, list):
        required = []

    additional = raw.get("additionalProperties")
    if isinstance(additional, dict):
        additional_node: SchemaNode | None = parse_schema(additional)
    elif additional is True:
        additional_node = UnknownNode()
    else:
        additional_node = None

    return ObjectNode(
        properties={name: parse_schema(prop) for name, prop in properties.items()},
        required=frozenset(str(name) for name in required),
        additional_properties=additional_node,
        nullable=nullable,
    )
