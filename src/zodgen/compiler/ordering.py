"""Topological ordering of the schema dependency graph.

Generated validators are single-pass, top-to-bottom definitions: a
``const`` may not mention a validator declared further down. Schemas must
therefore be emitted with every dependency ahead of its dependents.

Two functions are provided:

* :func:`topological_sort` -- Kahn's algorithm over the graph as given. An
  edge ``N -> D`` means "N references D", so the raw result lists every
  name *before* the names it references.
* :func:`order_schemas` -- the emission order, i.e. the reverse of
  :func:`topological_sort`: dependencies first, dependents last.

Names that are referenced but are not nodes of the graph (dangling
references) take no part in the ordering. Both functions raise
:class:`~zodgen.exceptions.CircularDependencyError` when no order exists;
a schema that references itself counts as a cycle.

Tie-breaking between independent names is deterministic (declaration order
seeds a LIFO work-list, dependencies are visited in sorted order) but is not
part of the contract.
"""

from __future__ import annotations

import logging
from typing import Mapping

from zodgen.exceptions import CircularDependencyError

logger = logging.getLogger(__name__)


def topological_sort(graph: Mapping[str, frozenset[str]]) -> list[str]:
    """Order *graph* so each name precedes every name it depends on.

    The in-degree of a name is the number of distinct graph nodes whose
    dependency set contains it. Names with in-degree zero seed the work-list;
    each name removed from the work-list is appended to the result and
    releases its dependencies.

    Args:
        graph: Schema name -> immediately referenced names.

    Returns:
        Every node of *graph* exactly once, dependents before dependencies.

    Raises:
        CircularDependencyError: If the graph contains a cycle. The error
            names only the schemas that lie on a cycle, not the ones that are
            merely reachable from one.

    Example::

        >>> topological_sort({"A": {"B"}, "B": set()})
        ['A', 'B']
    """
    in_degree: dict[str, int] = {name: 0 for name in graph}
    for deps in graph.values():
        for dep in deps:
            if dep in in_degree:
                in_degree[dep] += 1

    work_list = [name for name, degree in in_degree.items() if degree == 0]
    result: list[str] = []

    while work_list:
        name = work_list.pop()
        result.append(name)
        for dep in sorted(graph[name]):
            if dep not in in_degree:
                continue
            in_degree[dep] -= 1
            if in_degree[dep] == 0:
                work_list.append(dep)

    if len(result) != len(graph):
        placed = set(result)
        unplaced = [name for name in graph if name not in placed]
        raise CircularDependencyError(_cycle_members(graph, unplaced))

    return result


def _cycle_members(graph: Mapping[str, frozenset[str]], unplaced: list[str]) -> list[str]:
    """Return the names in *unplaced* that can reach themselves.

    Kahn's algorithm leaves behind every cycle plus whatever the cycles
    depend on. Only the names with a path back to themselves are kept.
    """
    pending = set(unplaced)
    members: list[str] = []
    for start in unplaced:
        seen: set[str] = set()
        stack = [dep for dep in graph[start] if dep in pending]
        while stack:
            name = stack.pop()
            if name == start:
                members.append(start)
                break
            if name in seen:
                continue
            seen.add(name)
            stack.extend(dep for dep in graph[name] if dep in pending)
    return members


def order_schemas(graph: Mapping[str, frozenset[str]]) -> list[str]:
    """Return the emission order for *graph*: dependencies before dependents.

    For every name ``N`` and every ``D`` in ``graph[N]`` that is itself a
    node, ``D`` appears before ``N``.

    Raises:
        CircularDependencyError: If the graph contains a cycle.
    """
    order = topological_sort(graph)
    order.reverse()
    logger.debug("Schema emission order: %s", order)
    return order
