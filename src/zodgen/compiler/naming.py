"""Identifier helpers shared by the type resolver and the operation compiler.

Everything the generator writes as a TypeScript name -- schema constants,
type aliases, function names, argument names, object keys -- goes through
here so the same spec name always maps to the same symbol.
"""

from __future__ import annotations

import json
import re
from typing import Iterable

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

RESERVED_WORDS = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "eval", "export",
    "extends", "false", "finally", "for", "function", "if", "implements",
    "import", "in", "instanceof", "interface", "let", "new", "null", "package",
    "private", "protected", "public", "return", "static", "super", "switch",
    "this", "throw", "true", "try", "typeof", "var", "void", "while", "with",
    "yield",
})
"""Words that cannot name a binding in a strict-mode TypeScript module."""

_TYPE_KEYWORDS = frozenset({
    "any", "bigint", "boolean", "never", "number", "object", "string", "symbol",
    "undefined", "unknown",
})
"""Predefined type names that cannot be used as a type alias."""

FUNCTION_ARGUMENTS = frozenset({"params", "body", "options"})
"""Argument names every endpoint function may declare itself."""

def upper_first(word: str) -> str:
    """Upper-case the first character only (``"userId"`` -> ``"UserId"``)."""
    return word[:1].upper() + word[1:]


def camel_words(text: str) -> str:
    """Join the alphanumeric runs of *text*, each with its first letter upper-cased.

    Example::

        >>> camel_words("user-profiles")
        'UserProfiles'
        >>> camel_words("pet_id")
        'PetId'
    """
    return "".join(upper_first(word) for word in _SEPARATOR_RE.split(text) if word)


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def to_identifier(name: str) -> str:
    """Return *name* if it is a valid JS identifier, else a camel-cased version.

    ``"list-users"`` becomes ``"listUsers"``, ``"Pet.Category"`` becomes
    ``"PetCategory"``; a leading digit gets an underscore prefix. Reserved
    words get a trailing underscore (``"delete"`` -> ``"delete_"``).
    """
    if is_identifier(name):
        result = name
    else:
        words = [word for word in _SEPARATOR_RE.split(name) if word]
        if not words:
            return "_"
        result = words[0] + "".join(upper_first(word) for word in words[1:])
        if result[0].isdigit():
            result = f"_{result}"
    if result in RESERVED_WORDS:
        result = f"{result}_"
    return result


def argument_name(name: str) -> str:
    """Endpoint-function argument for the path parameter *name*.

    Same as :func:`to_identifier`, except that names clashing with the
    fixed ``params``, ``body`` and ``options`` arguments get a ``Param``
    suffix.

    Example::

        >>> argument_name("pet-id")
        'petId'
        >>> argument_name("body")
        'bodyParam'
    """
    result = to_identifier(name)
    if result in FUNCTION_ARGUMENTS:
        result = f"{result}Param"
    return result


def property_key(name: str) -> str:
    """Return *name* as an object key, quoted when it is not an identifier.

    Example::

        >>> property_key("id")
        'id'
        >>> property_key("x-rate-limit")
        '"x-rate-limit"'
    """
    return name if is_identifier(name) else json.dumps(name)


def type_name(schema_name: str) -> str:
    """TypeScript alias for the named schema *schema_name*."""
    result = to_identifier(schema_name)
    if result in _TYPE_KEYWORDS:
        result = f"{result}_"
    return result


def schema_symbol(schema_name: str) -> str:
    """Exported validator constant for the named schema *schema_name*."""
    return f"{type_name(schema_name)}Schema"


def find_name_collisions(schema_names: Iterable[str]) -> dict[str, list[str]]:
    """Group schema names that map to the same :func:`type_name`.

    Returns:
        Type name -> the two or more schema names that produce it, in the
        order given. Names without a clash are left out.

    Example::

        >>> find_name_collisions(["Pet-Category", "PetCategory", "Tag"])
        {'PetCategory': ['Pet-Category', 'PetCategory']}
    """
    by_type: dict[str, list[str]] = {}
    for name in schema_names:
        by_type.setdefault(type_name(name), []).append(name)
    return {alias: names for alias, names in by_type.items() if len(names) > 1}
