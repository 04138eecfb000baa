"""Follow JSON Reference pointers to reusable OpenAPI components.

Schema ``$ref`` objects are never inlined: the compiler keeps them as
symbolic :class:`~zodgen.models.ReferenceNode` indirections so recursive
schemas do not expand forever. Parameters, request bodies and responses are
different -- the operation compiler needs their actual contents -- so this
module resolves those on demand.

Only **internal** references (``#/...``) are supported. Chains of references
(a ``$ref`` whose target is itself a ``$ref``) are followed; a chain that
loops back on itself raises :class:`~zodgen.exceptions.SpecParseError`.
"""

from __future__ import annotations

from typing import Any

from zodgen.exceptions import SpecParseError


def resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Return the value *ref* points to inside *root*.

    Handles RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``) and
    numeric list indices.

    Args:
        ref: The ``$ref`` string, e.g. ``"#/components/parameters/Limit"``.
        root: The document (or a dict with the same top-level layout).

    Raises:
        SpecParseError: If the reference is external or any segment is
            missing.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for raw_segment in ref[2:].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': cannot navigate into "
                f"{type(current).__name__}"
            )
    return current


def deref(obj: Any, components: dict[str, Any]) -> Any:
    """Replace *obj* with its target while it is a ``{"$ref": ...}`` dict.

    Only the top level of *obj* is resolved; nested schemas keep their
    ``$ref`` pointers.

    Args:
        obj: A parameter, request body or response object, possibly a
            reference.
        components: The document's ``components`` section.

    Returns:
        The first non-reference object along the chain, or *obj* unchanged
        when it is not a reference.
    """
    root = {"components": components}
    seen: set[str] = set()
    while isinstance(obj, dict) and isinstance(obj.get("$ref"), str):
        ref = obj["$ref"]
        if ref in seen:
            raise SpecParseError(f"Circular $ref chain through '{ref}'")
        seen.add(ref)
        obj = resolve_pointer(ref, root)
    return obj


def ref_name(ref: str) -> str:
    """Return the last segment of *ref* (``#/components/schemas/Pet`` -> ``Pet``)."""
    return ref.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")
