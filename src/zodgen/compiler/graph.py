"""Schema dependency graph construction.

Each named schema maps to the set of schema names it *immediately*
references. The walk only descends into a node's own substructure and stops
at every :class:`~zodgen.models.ReferenceNode`, so a schema that refers to
itself simply lists its own name; no cycle guard is needed here. Cycles are
the orderer's problem (see :mod:`zodgen.compiler.ordering`).
"""

from __future__ import annotations

from typing import Mapping

from zodgen.models import (
    ArrayNode,
    BooleanNode,
    CompositeNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaNode,
    StringNode,
    UnknownNode,
)

DependencyGraph = dict[str, frozenset[str]]
"""Schema name -> names it immediately references (not transitively closed)."""


def dependencies_of(node: SchemaNode) -> frozenset[str]:
    """Return the schema names *node* references one level deep.

    * Reference -- its target.
    * Array -- the dependencies of its items.
    * Object -- the union over every property, required or not, and
      ``additionalProperties``.
    * Composite -- the union over its members.
    * String, Number, Boolean, Enum, Unknown -- nothing.

    Args:
        node: Any schema node.

    Returns:
        The referenced names.
    """
    if isinstance(node, ReferenceNode):
        return frozenset((node.target,))
    if isinstance(node, ArrayNode):
        return dependencies_of(node.items)
    if isinstance(node, ObjectNode):
        deps: set[str] = set()
        for prop in node.properties.values():
            deps |= dependencies_of(prop)
        if node.additional_properties is not None:
            deps |= dependencies_of(node.additional_properties)
        return frozenset(deps)
    if isinstance(node, CompositeNode):
        deps = set()
        for member in node.members:
            deps |= dependencies_of(member)
        return frozenset(deps)
    if isinstance(node, (StringNode, NumberNode, BooleanNode, EnumNode, UnknownNode)):
        return frozenset()
    raise TypeError(f"Unhandled schema node: {type(node).__name__}")


def build_dependency_graph(schemas: Mapping[str, SchemaNode]) -> DependencyGraph:
    """Build the dependency graph for every named schema.

    Keys keep the declaration order of *schemas*.

    Example::

        graph = build_dependency_graph(document.schemas)
        # {"Pet": frozenset({"Category", "Tag"}), "Tag": frozenset(), ...}
    """
    return {name: dependencies_of(node) for name, node in schemas.items()}


def find_dangling_references(graph: Mapping[str, frozenset[str]]) -> list[str]:
    """Return the referenced names that are not nodes of *graph*, sorted."""
    referenced: set[str] = set()
    for deps in graph.values():
        referenced |= deps
    return sorted(referenced - graph.keys())
