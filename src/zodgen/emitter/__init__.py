"""TypeScript emitter -- render compiled schemas and operations as source text.

Rendering is pure string assembly over Jinja2 templates in
``emitter/templates/``; every decision (order, types, names) has already been
made by :mod:`zodgen.compiler`.

* ``schemas.ts.j2`` -- a type alias and a zod validator per named schema.
* ``client.ts.j2`` -- the fixed transport client (``get``/``post``/``put``/
  ``patch``/``del``) sharing one ``RequestOptions`` shape.
* ``endpoints.ts.j2`` -- one exported async function per operation.
"""

from zodgen.emitter.render import render_client, render_endpoints, render_schemas

__all__ = ["render_schemas", "render_client", "render_endpoints"]
