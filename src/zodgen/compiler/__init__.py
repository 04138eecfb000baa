"""Schema and operation compiler -- the algorithmic core of zodgen.

Takes a :class:`~zodgen.models.Document` and derives everything the emitter
needs, without performing any I/O:

* :mod:`~zodgen.compiler.graph` -- immediate ``$ref`` dependencies of every
  named schema.
* :mod:`~zodgen.compiler.ordering` -- Kahn's topological sort with cycle
  detection, and the dependency-first emission order.
* :mod:`~zodgen.compiler.typemap` -- recursive conversion of a schema node into
  a zod validator expression and a TypeScript type.
* :mod:`~zodgen.compiler.operations` -- function names, parameters, request
  and response types for every path + method.
"""

from zodgen.compiler.graph import build_dependency_graph, dependencies_of
from zodgen.compiler.operations import compile_operation, compile_operations
from zodgen.compiler.ordering import order_schemas, topological_sort
from zodgen.compiler.typemap import TypeResolver

__all__ = [
    "build_dependency_graph",
    "dependencies_of",
    "topological_sort",
    "order_schemas",
    "TypeResolver",
    "compile_operation",
    "compile_operations",
]
