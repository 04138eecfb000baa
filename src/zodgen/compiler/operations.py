"""Derive typed function signatures from OpenAPI operations.

For every path + HTTP method pair the compiler produces an
:class:`~zodgen.models.Operation`: the exported function name, the path and
query parameters, the request body and response types, and the URL template.
Nothing here performs I/O.

**Identifiers.** An explicit ``operationId`` wins. Otherwise the name is the
method followed by the camel-cased path segments, where a ``{param}``
segment becomes ``By`` + ``Param``::

    get  /items/{id}            -> getItemsById
    post /user-profiles         -> postUserProfiles

**Response type.** Success statuses are examined in the fixed order ``200``,
``201``, ``204``. The first one present decides: no content means ``void``;
otherwise the first content type in the order ``application/pdf``,
``application/octet-stream``, ``application/json`` that carries a schema is
resolved. Anything else is ``any``.

**Request body.** Only ``post``, ``put`` and ``patch`` take a body, resolved
with the same content-type order; no usable body means ``any``.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from zodgen.compiler.naming import argument_name, camel_words, to_identifier
from zodgen.compiler.typemap import PERMISSIVE, VOID, TypeResolver
from zodgen.models import Document, HTTPMethod, Operation, ResolvedType
from zodgen.parser.document import parse_schema
from zodgen.parser.resolver import deref

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = ("200", "201", "204")
"""Response status codes consulted for the return type, in priority order."""

CONTENT_TYPES = ("application/pdf", "application/octet-stream", "application/json")
"""Media types consulted for request and response schemas, in priority order."""

_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")

MODULE_BINDINGS = frozenset({"apiClient", "ApiResponse", "RequestOptions", "Schemas", "BASE_URL"})
"""Names already bound at the top of the endpoints module."""


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def _is_path_param(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def derive_operation_id(method: str, path: str) -> str:
    """Build a function name from *method* and *path*.

    A pure function of its two arguments.

    Example::

        >>> derive_operation_id("get", "/users/{id}")
        'getUsersById'
        >>> derive_operation_id("delete", "/pets/{pet_id}/tags")
        'deletePetsByPetIdTags'
    """
    parts: list[str] = [method.lower()]
    for segment in path.split("/"):
        if not segment:
            continue
        if _is_path_param(segment):
            parts.append("By" + camel_words(segment[1:-1]))
        else:
            parts.append(camel_words(segment))
    return "".join(parts)


def url_template(path: str) -> str:
    """Rewrite ``{param}`` placeholders as template-literal ``${param}`` slots.

    Example::

        >>> url_template("/items/{item-id}")
        '/items/${itemId}'
    """
    return _PATH_PARAM_RE.sub(lambda match: "${" + argument_name(match.group(1)) + "}", path)


def extract_base_path(paths: list[str]) -> str:
    """Return the longest common segment prefix shared by all *paths*.

    The prefix is trimmed so every path keeps at least one segment, which
    means a single path never yields a base path.

    Example::

        >>> extract_base_path(["/api/v1/users", "/api/v1/pets/{id}"])
        '/api/v1'
        >>> extract_base_path(["/users", "/pets"])
        ''
    """
    split_paths = [[s for s in path.split("/") if s] for path in paths]
    if len(split_paths) < 2:
        return ""

    prefix: list[str] = []
    for segments in zip(*split_paths):
        if len(set(segments)) != 1 or _is_path_param(segments[0]):
            break
        prefix.append(segments[0])

    shortest = min(len(segments) for segments in split_paths)
    del prefix[max(shortest - 1, 0):]
    return "/" + "/".join(prefix) if prefix else ""


def _relative_path(path: str, base_path: str) -> str:
    base_path = base_path.rstrip("/")
    if not base_path or not path.startswith(base_path):
        return path
    rest = path[len(base_path):]
    if rest and not rest.startswith("/"):
        # "/api/v1" is not a prefix of "/api/v10/users"
        return path
    return rest or "/"


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


def _merge_parameters(
    path_params: list[Any],
    op_params: list[Any],
    components: dict[str, Any],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    ``$ref`` parameters are resolved first. Operation-level parameters
    replace path-level ones with the same ``name`` and ``in``; path-level
    parameters keep their position ahead of the operation-level ones.
    """
    resolved_path = [deref(p, components) for p in path_params]
    resolved_op = [deref(p, components) for p in op_params]
    resolved_path = [p for p in resolved_path if isinstance(p, dict)]
    resolved_op = [p for p in resolved_op if isinstance(p, dict)]

    overridden = {(p.get("name"), p.get("in")) for p in resolved_op}
    merged = [p for p in resolved_path if (p.get("name"), p.get("in")) not in overridden]
    merged.extend(resolved_op)
    return merged


def _names_in(params: list[dict[str, Any]], location: str) -> list[str]:
    names: list[str] = []
    for param in params:
        name = param.get("name")
        if param.get("in") == location and name and str(name) not in names:
            names.append(str(name))
    return names


def _path_param_names(params: list[dict[str, Any]], path: str) -> list[str]:
    """Declared path parameters, then any placeholder in *path* left undeclared."""
    names = _names_in(params, "path")
    for placeholder in _PATH_PARAM_RE.findall(path):
        if placeholder not in names:
            names.append(placeholder)
    return names


# ---------------------------------------------------------------------------
# Content types
# ---------------------------------------------------------------------------


def _media_type(key: str) -> str:
    """Normalise ``"Application/JSON; charset=utf-8"`` to ``"application/json"``."""
    return key.split(";", 1)[0].strip().lower()


def _content_schema(
    content: dict[str, Any], resolver: TypeResolver
) -> Optional[ResolvedType]:
    """Resolve the schema of the highest-priority content type present, if any."""
    by_media_type: dict[str, Any] = {}
    for key, media in content.items():
        by_media_type.setdefault(_media_type(str(key)), media)

    for content_type in CONTENT_TYPES:
        media = by_media_type.get(content_type)
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            return resolver.resolve(parse_schema(media["schema"]))
    return None


def response_type(
    responses: dict[str, Any],
    resolver: TypeResolver,
    components: Optional[dict[str, Any]] = None,
) -> ResolvedType:
    """Resolve the return type from an operation's ``responses`` map.

    Args:
        responses: The raw ``responses`` object, keyed by status code.
        resolver: Resolver used for the content schema.
        components: The document's ``components``, for ``$ref`` responses.

    Returns:
        :data:`~zodgen.compiler.typemap.VOID` when the first present success
        status has no content, the resolved schema when a supported content
        type matches, otherwise :data:`~zodgen.compiler.typemap.PERMISSIVE`.
    """
    by_status = {str(status): response for status, response in responses.items()}
    for status in SUCCESS_STATUSES:
        if status not in by_status:
            continue
        response = deref(by_status[status], components or {})
        if not isinstance(response, dict):
            return PERMISSIVE
        content = response.get("content")
        if not isinstance(content, dict) or not content:
            return VOID
        return _content_schema(content, resolver) or PERMISSIVE
    return PERMISSIVE


def request_body_type(
    request_body: Any,
    resolver: TypeResolver,
    components: Optional[dict[str, Any]] = None,
) -> ResolvedType:
    """Resolve the type of an operation's ``requestBody``.

    Returns :data:`~zodgen.compiler.typemap.PERMISSIVE` when there is no body
    or no supported content type.
    """
    body = deref(request_body, components or {})
    if not isinstance(body, dict):
        return PERMISSIVE
    content = body.get("content")
    if not isinstance(content, dict):
        return PERMISSIVE
    return _content_schema(content, resolver) or PERMISSIVE


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def compile_operation(
    path: str,
    method: HTTPMethod | str,
    operation: dict[str, Any],
    *,
    path_item: Optional[dict[str, Any]] = None,
    components: Optional[dict[str, Any]] = None,
    base_path: str = "",
    resolver: Optional[TypeResolver] = None,
) -> Operation:
    """Derive the :class:`~zodgen.models.Operation` for one path + method.

    Args:
        path: The path template as written in the spec (``/users/{id}``).
        method: The HTTP method.
        operation: The raw Operation Object.
        path_item: The enclosing Path Item, for path-level parameters.
        components: The document's ``components``, for ``$ref`` lookups.
        base_path: Common prefix stripped from *path* before deriving the
            identifier and the URL template; the client prepends it again.
        resolver: Type resolver; defaults to one using the ``Schemas.``
            namespace of the generated endpoints module.

    Returns:
        The compiled operation.
    """
    method = HTTPMethod(method)
    components = components or {}
    resolver = resolver or TypeResolver(namespace="Schemas.")
    relative = _relative_path(path, base_path)

    explicit_id = operation.get("operationId")
    if isinstance(explicit_id, str) and explicit_id:
        identifier = to_identifier(explicit_id)
    else:
        explicit_id = None
        identifier = derive_operation_id(method.value, relative)

    params = _merge_parameters(
        (path_item or {}).get("parameters") or [],
        operation.get("parameters") or [],
        components,
    )

    body_type: Optional[str] = None
    if method.has_body:
        body_type = request_body_type(operation.get("requestBody"), resolver, components).type

    summary = operation.get("summary")
    return Operation(
        path=path,
        method=method,
        operation_id=explicit_id,
        identifier=identifier,
        path_params=_path_param_names(params, relative),
        query_params=_names_in(params, "query"),
        request_body_type=body_type,
        response_type=response_type(operation.get("responses") or {}, resolver, components).type,
        url_template=url_template(relative),
        summary=summary if isinstance(summary, str) else None,
        deprecated=operation.get("deprecated") is True,
    )


def compile_operations(document: Document, base_path: str = "") -> list[Operation]:
    """Compile every supported operation in *document*.

    Paths are visited in declaration order and methods in
    :class:`~zodgen.models.HTTPMethod` order. When two operations end up with
    the same identifier, later ones get a numeric suffix (``getUsers2``).
    Identifiers that would shadow :data:`MODULE_BINDINGS` are suffixed the
    same way.
    """
    resolver = TypeResolver(namespace="Schemas.")
    operations: list[Operation] = []
    taken: set[str] = set(MODULE_BINDINGS)

    for path, path_item in document.paths.items():
        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue
            compiled = compile_operation(
                path,
                method,
                operation,
                path_item=path_item,
                components=document.components,
                base_path=base_path,
                resolver=resolver,
            )
            if compiled.identifier in taken:
                suffix = 2
                while f"{compiled.identifier}{suffix}" in taken:
                    suffix += 1
                unique = f"{compiled.identifier}{suffix}"
                logger.debug(
                    "Identifier %s already used, renaming %s %s to %s",
                    compiled.identifier, method.value, path, unique,
                )
                compiled = compiled.model_copy(update={"identifier": unique})
            taken.add(compiled.identifier)
            operations.append(compiled)

    return operations
