"""Tests for zodgen.compiler.operations."""

from __future__ import annotations

from typing import Any

import pytest

from zodgen.compiler.operations import (
    compile_operation,
    compile_operations,
    derive_operation_id,
    extract_base_path,
    request_body_type,
    response_type,
    url_template,
)
from zodgen.compiler.typemap import PERMISSIVE, VOID, TypeResolver
from zodgen.exceptions import SpecParseError
from zodgen.models import HTTPMethod
from zodgen.parser import build_document


def json_content(schema: dict[str, Any]) -> dict[str, Any]:
    return {"application/json": {"schema": schema}}


# ---------------------------------------------------------------------------
# Identifiers and URLs
# ---------------------------------------------------------------------------


class TestDeriveOperationId:
    def test_path_parameter(self) -> None:
        assert derive_operation_id("get", "/users/{id}") == "getUsersById"

    def test_kebab_segments(self) -> None:
        assert derive_operation_id("post", "/user-profiles") == "postUserProfiles"

    def test_snake_path_parameter(self) -> None:
        assert derive_operation_id("delete", "/pets/{pet_id}/tags") == "deletePetsByPetIdTags"

    def test_root_path(self) -> None:
        assert derive_operation_id("get", "/") == "get"

    def test_pure(self) -> None:
        assert {derive_operation_id("put", "/a/{b}") for _ in range(5)} == {"putAByB"}


class TestUrlTemplate:
    def test_placeholders_become_template_slots(self) -> None:
        assert url_template("/users/{id}/posts/{postId}") == "/users/${id}/posts/${postId}"

    def test_non_identifier_placeholder(self) -> None:
        assert url_template("/items/{item-id}") == "/items/${itemId}"

    def test_static_path_unchanged(self) -> None:
        assert url_template("/health") == "/health"

    def test_placeholder_clashing_with_fixed_argument(self) -> None:
        assert url_template("/things/{body}") == "/things/${bodyParam}"

    def test_reserved_word_placeholder(self) -> None:
        assert url_template("/schools/{class}") == "/schools/${class_}"


class TestExtractBasePath:
    def test_common_prefix(self) -> None:
        assert extract_base_path(["/api/v1/users", "/api/v1/pets/{id}"]) == "/api/v1"

    def test_no_common_prefix(self) -> None:
        assert extract_base_path(["/users", "/pets"]) == ""

    def test_single_path(self) -> None:
        assert extract_base_path(["/api/v1/users"]) == ""

    def test_empty(self) -> None:
        assert extract_base_path([]) == ""

    def test_keeps_one_segment_per_path(self) -> None:
        assert extract_base_path(["/api/users", "/api/users/{id}"]) == "/api"

    def test_stops_at_path_parameter(self) -> None:
        assert extract_base_path(["/{tenant}/a", "/{tenant}/b"]) == ""


# ---------------------------------------------------------------------------
# Response and request types
# ---------------------------------------------------------------------------


class TestResponseType:
    def test_204_without_content_is_void(self) -> None:
        assert response_type({"204": {"description": "No Content"}}, TypeResolver()) is VOID

    def test_200_preferred_over_201(self) -> None:
        responses = {
            "201": {"content": json_content({"type": "string"})},
            "200": {"content": json_content({"type": "number"})},
        }
        assert response_type(responses, TypeResolver()).type == "number"

    def test_first_present_status_decides(self) -> None:
        responses = {
            "200": {"description": "OK, no body"},
            "201": {"content": json_content({"type": "string"})},
        }
        assert response_type(responses, TypeResolver()) is VOID

    def test_empty_content_is_void(self) -> None:
        assert response_type({"200": {"content": {}}}, TypeResolver()) is VOID

    def test_no_success_status_is_permissive(self) -> None:
        responses = {"404": {"content": json_content({"type": "string"})}}
        assert response_type(responses, TypeResolver()) is PERMISSIVE

    def test_integer_status_keys(self) -> None:
        responses = {200: {"content": json_content({"type": "boolean"})}}
        assert response_type(responses, TypeResolver()).type == "boolean"

    def test_content_type_priority(self) -> None:
        content = {
            "application/json": {"schema": {"type": "string"}},
            "application/octet-stream": {"schema": {"type": "string", "format": "binary"}},
            "application/pdf": {"schema": {"type": "number"}},
        }
        assert response_type({"200": {"content": content}}, TypeResolver()).type == "number"

    def test_media_type_parameters_ignored(self) -> None:
        content = {"application/json; charset=utf-8": {"schema": {"type": "string"}}}
        assert response_type({"200": {"content": content}}, TypeResolver()).type == "string"

    def test_unsupported_content_type_is_permissive(self) -> None:
        content = {"text/plain": {"schema": {"type": "string"}}}
        assert response_type({"200": {"content": content}}, TypeResolver()) is PERMISSIVE

    def test_ref_response(self) -> None:
        components = {"responses": {"Ok": {"content": json_content({"type": "string"})}}}
        responses = {"200": {"$ref": "#/components/responses/Ok"}}
        assert response_type(responses, TypeResolver(), components).type == "string"


class TestRequestBodyType:
    def test_json_body(self) -> None:
        body = {"content": json_content({"$ref": "#/components/schemas/NewPet"})}
        assert request_body_type(body, TypeResolver("Schemas.")).type == "Schemas.NewPet"

    def test_missing_body_is_permissive(self) -> None:
        assert request_body_type(None, TypeResolver()) is PERMISSIVE

    def test_unresolvable_ref_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            request_body_type({"$ref": "#/components/requestBodies/Nope"}, TypeResolver(), {})


# ---------------------------------------------------------------------------
# compile_operation
# ---------------------------------------------------------------------------


class TestCompileOperation:
    def test_derived_identifier(self) -> None:
        op = compile_operation("/users/{id}", "get", {"responses": {}})
        assert op.identifier == "getUsersById"
        assert op.operation_id is None
        assert op.path_params == ["id"]
        assert op.url_template == "/users/${id}"

    def test_explicit_operation_id_is_sanitised(self) -> None:
        op = compile_operation("/users", "get", {"operationId": "list-users"})
        assert op.operation_id == "list-users"
        assert op.identifier == "listUsers"

    def test_only_body_methods_take_a_body(self) -> None:
        body = {"requestBody": {"content": json_content({"type": "string"})}}
        assert compile_operation("/x", "get", body).request_body_type is None
        assert compile_operation("/x", "delete", body).request_body_type is None
        for method in ("post", "put", "patch"):
            assert compile_operation("/x", method, body).request_body_type == "string"

    def test_body_method_without_body_is_permissive(self) -> None:
        assert compile_operation("/x", "post", {}).request_body_type == "any"

    def test_204_response_is_void(self) -> None:
        op = compile_operation("/x", "delete", {"responses": {"204": {"description": "gone"}}})
        assert op.response_type == "void"

    def test_parameters_merged_and_resolved(self) -> None:
        components = {
            "parameters": {"Page": {"name": "page", "in": "query", "schema": {"type": "integer"}}}
        }
        path_item = {
            "parameters": [
                {"name": "orgId", "in": "path", "required": True},
                {"name": "sort", "in": "query"},
            ]
        }
        operation = {
            "parameters": [
                {"$ref": "#/components/parameters/Page"},
                {"name": "sort", "in": "query", "description": "override"},
                {"name": "X-Trace", "in": "header"},
            ]
        }
        op = compile_operation(
            "/orgs/{orgId}/members",
            "get",
            operation,
            path_item=path_item,
            components=components,
        )
        assert op.path_params == ["orgId"]
        assert op.query_params == ["page", "sort"]

    def test_undeclared_placeholder_becomes_path_param(self) -> None:
        op = compile_operation("/a/{x}/b/{y}", "get", {"parameters": [{"name": "y", "in": "path"}]})
        assert op.path_params == ["y", "x"]

    def test_base_path_stripped(self) -> None:
        op = compile_operation("/api/v1/users/{id}", "get", {}, base_path="/api/v1")
        assert op.path == "/api/v1/users/{id}"
        assert op.identifier == "getUsersById"
        assert op.url_template == "/users/${id}"

    def test_base_path_respects_segment_boundary(self) -> None:
        op = compile_operation("/api/v10/users", "get", {}, base_path="/api/v1")
        assert op.url_template == "/api/v10/users"

    def test_summary_and_deprecated(self) -> None:
        op = compile_operation("/x", "get", {"summary": "Fetch x", "deprecated": True})
        assert op.summary == "Fetch x"
        assert op.deprecated is True

    def test_response_uses_schemas_namespace(self) -> None:
        op = compile_operation(
            "/pets",
            HTTPMethod.GET,
            {"responses": {"200": {"content": json_content({"$ref": "#/components/schemas/Pet"})}}},
        )
        assert op.response_type == "Schemas.Pet"


# ---------------------------------------------------------------------------
# compile_operations
# ---------------------------------------------------------------------------


class TestCompileOperations:
    def test_petstore(self, petstore_document) -> None:
        ops = compile_operations(petstore_document, "/api/v1")
        assert [(op.method.value, op.identifier) for op in ops] == [
            ("get", "listPets"),
            ("post", "postPets"),
            ("get", "getPetsByPetId"),
            ("delete", "deletePetsByPetId"),
            ("get", "getPetsByPetIdPhoto"),
        ]
        list_pets = ops[0]
        assert list_pets.query_params == ["limit", "status"]
        assert list_pets.response_type == "Schemas.Pet[]"
        assert ops[1].request_body_type == "Schemas.NewPet"
        assert ops[1].response_type == "Schemas.Pet"
        assert ops[3].response_type == "void"
        assert ops[3].deprecated is True
        assert ops[4].response_type == "Blob"

    def test_duplicate_identifiers_get_suffixes(self, make_spec) -> None:
        spec = make_spec(
            paths={
                "/a": {"get": {"operationId": "fetch"}},
                "/b": {"get": {"operationId": "fetch"}},
                "/c": {"get": {"operationId": "fetch"}},
            }
        )
        ops = compile_operations(build_document(spec, "3.0.3"))
        assert [op.identifier for op in ops] == ["fetch", "fetch2", "fetch3"]

    def test_identifier_shadowing_module_binding_gets_suffix(self, make_spec) -> None:
        spec = make_spec(
            paths={
                "/a": {"get": {"operationId": "apiClient"}},
                "/b": {"get": {"operationId": "BASE_URL"}},
            }
        )
        ops = compile_operations(build_document(spec, "3.0.3"))
        assert [op.identifier for op in ops] == ["apiClient2", "BASE_URL2"]

    def test_reserved_operation_id(self, make_spec) -> None:
        spec = make_spec(paths={"/a": {"delete": {"operationId": "delete"}}})
        ops = compile_operations(build_document(spec, "3.0.3"))
        assert [op.identifier for op in ops] == ["delete_"]

    def test_unsupported_methods_skipped(self, make_spec) -> None:
        spec = make_spec(paths={"/a": {"head": {}, "options": {}, "get": {}, "summary": "x"}})
        ops = compile_operations(build_document(spec, "3.0.3"))
        assert [op.identifier for op in ops] == ["getA"]
