"""Canonical Pydantic models shared across all zodgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- read from ``./zodgen.json`` and the environment:
    :class:`GeneratorConfig`.

**Schema nodes** -- a closed, discriminated union over the structural kinds a
schema can take. Each variant is its own frozen model with a literal ``kind``
tag, so the graph builder and the type resolver handle every case by
``isinstance`` dispatch, with :class:`UnknownNode` as the explicit catch-all:
    :class:`StringNode`, :class:`NumberNode`, :class:`BooleanNode`,
    :class:`ArrayNode`, :class:`ObjectNode`, :class:`ReferenceNode`,
    :class:`EnumNode`, :class:`CompositeNode`, :class:`UnknownNode`.

**Compiler models** -- produced by the parser and the compiler and consumed by
the emitter:
    :class:`Document`, :class:`ResolvedType`, :class:`Operation`,
    :class:`GeneratedSources`.

All compiler-side models are frozen; every compilation run builds fresh
instances and discards them after emission.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SCHEMAS_FILENAME = "schemas.api.ts"
CLIENT_FILENAME = "client.api.ts"
ENDPOINTS_FILENAME = "endpoints.api.ts"


# --- Generator Config ---


class GeneratorConfig(BaseModel):
    """Effective generator settings after precedence resolution.

    Loaded by :func:`~zodgen.config.resolve_config`, which layers CLI flags
    over environment variables over the project-local ``zodgen.json``.
    """

    output: str = Field(
        default="./__generated__", description="Directory for generated files"
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Origin (e.g. https://api.example.com) placed before the "
        "common path prefix in the generated client's base URL",
    )
    strict_refs: bool = Field(
        default=False,
        description="Fail when a $ref targets a schema that does not exist",
    )


# --- Schema Nodes ---


class _BaseNode(BaseModel):
    """Fields shared by every schema node variant."""

    model_config = ConfigDict(frozen=True)

    nullable: bool = False


class StringNode(_BaseNode):
    """A ``type: string`` schema. ``format`` is kept for ``binary`` payloads."""

    kind: Literal["string"] = "string"
    format: Optional[str] = None


class NumberNode(_BaseNode):
    """A ``type: number`` or ``type: integer`` schema."""

    kind: Literal["number"] = "number"
    integer: bool = False


class BooleanNode(_BaseNode):
    kind: Literal["boolean"] = "boolean"


class ArrayNode(_BaseNode):
    """A ``type: array`` schema with a usable ``items`` node."""

    kind: Literal["array"] = "array"
    items: SchemaNode


class ObjectNode(_BaseNode):
    """A ``type: object`` schema.

    ``properties`` keeps declaration order. ``required`` is a set and is only
    ever consulted by membership, never by position.
    """

    kind: Literal["object"] = "object"
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    required: frozenset[str] = frozenset()
    additional_properties: Optional[SchemaNode] = None


class ReferenceNode(_BaseNode):
    """A ``$ref`` to another named schema, stored by its bare name."""

    kind: Literal["reference"] = "reference"
    target: str


class EnumNode(_BaseNode):
    """A schema restricted to a fixed, ordered set of literal values."""

    kind: Literal["enum"] = "enum"
    values: tuple[Any, ...]


class CompositeNode(_BaseNode):
    """An ``allOf``/``oneOf``/``anyOf``/``not`` schema.

    Composites are tracked for dependency purposes only; the resolver treats
    them as permissive.
    """

    kind: Literal["composite"] = "composite"
    composition: Literal["allOf", "oneOf", "anyOf", "not"]
    members: tuple[SchemaNode, ...] = ()


class UnknownNode(_BaseNode):
    """Catch-all for missing, unrecognised or malformed schema shapes."""

    kind: Literal["unknown"] = "unknown"


SchemaNode = Annotated[
    Union[
        StringNode,
        NumberNode,
        BooleanNode,
        ArrayNode,
        ObjectNode,
        ReferenceNode,
        EnumNode,
        CompositeNode,
        UnknownNode,
    ],
    Field(discriminator="kind"),
]

ArrayNode.model_rebuild()
ObjectNode.model_rebuild()
CompositeNode.model_rebuild()


# --- Compiler Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods for which wrapper functions are generated.

    Declaration order is the order operations are emitted within a path.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"

    @property
    def has_body(self) -> bool:
        """Whether the generated function takes a request ``body`` argument."""
        return self in (HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH)

    @property
    def client_method(self) -> str:
        """Name of the transport client function (``delete`` is reserved in JS)."""
        return "del" if self is HTTPMethod.DELETE else self.value


class Document(BaseModel):
    """The parsed API description handed to the compiler.

    ``schemas`` holds typed nodes for ``components.schemas``. ``paths`` and
    ``components`` are kept raw: the operation compiler reads parameters and
    content maps directly and resolves non-schema ``$ref`` pointers against
    ``components``.
    """

    model_config = ConfigDict(frozen=True)

    title: str = "Untitled API"
    version: str = "0.0.0"
    openapi_version: str = "3.0.0"
    servers: list[str] = Field(default_factory=list)
    schemas: dict[str, SchemaNode] = Field(default_factory=dict)
    paths: dict[str, dict[str, Any]] = Field(default_factory=dict)
    components: dict[str, Any] = Field(default_factory=dict)


class ResolvedType(BaseModel):
    """A zod validator expression paired with the matching TypeScript type."""

    model_config = ConfigDict(frozen=True)

    validator: str
    type: str


class Operation(BaseModel):
    """One HTTP method bound to one path, ready to be rendered as a function."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = Field(
        default=None, description="Explicit operationId from the spec"
    )
    identifier: str = Field(description="Final exported function name")
    path_params: list[str] = Field(default_factory=list)
    query_params: list[str] = Field(default_factory=list)
    request_body_type: Optional[str] = Field(
        default=None, description="None when the method carries no body"
    )
    response_type: str = "any"
    url_template: str
    summary: Optional[str] = None
    deprecated: bool = False


class GeneratedSources(BaseModel):
    """The three rendered modules plus the data they were rendered from."""

    model_config = ConfigDict(frozen=True)

    schemas: str
    client: str
    endpoints: str
    schema_order: list[str] = Field(default_factory=list)
    operations: list[Operation] = Field(default_factory=list)
    base_url: str = ""

    def files(self) -> dict[str, str]:
        """Map each fixed output file name to its content."""
        return {
            SCHEMAS_FILENAME: self.schemas,
            CLIENT_FILENAME: self.client,
            ENDPOINTS_FILENAME: self.endpoints,
        }
