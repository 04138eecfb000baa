"""OpenAPI spec parser -- load the raw document and build a typed :class:`~zodgen.models.Document`.

This sub-package is the front of the zodgen pipeline: it turns an OpenAPI 3.x
document (JSON or YAML, local file, remote URL or stdin) into the immutable
in-memory :class:`~zodgen.models.Document` the compiler works on.

Typical usage::

    from zodgen.parser import build_document, load_spec, validate_openapi_version

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    version = validate_openapi_version(raw)
    document = build_document(raw, version)

Sub-modules:

* :mod:`~zodgen.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~zodgen.parser.document` -- Classifies raw schema dicts into the
  closed set of schema node kinds.
* :mod:`~zodgen.parser.resolver` -- JSON Pointer lookup for the non-schema
  ``$ref`` objects (parameters, request bodies, responses).
"""

from zodgen.parser.document import build_document, parse_schema
from zodgen.parser.loader import load_spec, validate_openapi_version

__all__ = ["load_spec", "validate_openapi_version", "build_document", "parse_schema"]
