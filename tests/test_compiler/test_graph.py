"""Tests for zodgen.compiler.graph."""

from __future__ import annotations

from zodgen.compiler.graph import (
    build_dependency_graph,
    dependencies_of,
    find_dangling_references,
)
from zodgen.models import (
    ArrayNode,
    BooleanNode,
    CompositeNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    StringNode,
    UnknownNode,
)
from zodgen.parser import parse_schema


class TestDependenciesOf:
    def test_reference(self) -> None:
        assert dependencies_of(ReferenceNode(target="Pet")) == {"Pet"}

    def test_leaf_nodes_have_no_dependencies(self) -> None:
        for node in (
            StringNode(),
            NumberNode(integer=True),
            BooleanNode(),
            EnumNode(values=("a", "b")),
            UnknownNode(),
        ):
            assert dependencies_of(node) == frozenset()

    def test_array_items(self) -> None:
        assert dependencies_of(ArrayNode(items=ReferenceNode(target="Tag"))) == {"Tag"}

    def test_object_includes_optional_properties(self) -> None:
        node = ObjectNode(
            properties={
                "owner": ReferenceNode(target="User"),
                "tags": ArrayNode(items=ReferenceNode(target="Tag")),
                "name": StringNode(),
            },
            required=frozenset({"owner"}),
        )
        assert dependencies_of(node) == {"User", "Tag"}

    def test_object_additional_properties(self) -> None:
        node = ObjectNode(additional_properties=ReferenceNode(target="Value"))
        assert dependencies_of(node) == {"Value"}

    def test_composite_members(self) -> None:
        node = CompositeNode(
            composition="oneOf",
            members=(ReferenceNode(target="Cat"), ReferenceNode(target="Dog")),
        )
        assert dependencies_of(node) == {"Cat", "Dog"}

    def test_not_composite(self) -> None:
        node = parse_schema({"not": {"$ref": "#/components/schemas/Banned"}})
        assert dependencies_of(node) == {"Banned"}

    def test_immediate_only(self) -> None:
        # Nested objects are walked, references are not followed
        node = parse_schema(
            {
                "type": "object",
                "properties": {
                    "meta": {
                        "type": "object",
                        "properties": {"author": {"$ref": "#/components/schemas/User"}},
                    }
                },
            }
        )
        assert dependencies_of(node) == {"User"}


class TestBuildDependencyGraph:
    def test_preserves_declaration_order(self, petstore_document) -> None:
        g = build_dependency_graph(petstore_document.schemas)
        assert list(g) == ["Pet", "NewPet", "Category", "Tag"]
        assert g["Pet"] == {"Category", "Tag"}
        assert g["Tag"] == frozenset()

    def test_self_reference(self) -> None:
        schemas = {
            "Node": parse_schema(
                {
                    "type": "object",
                    "properties": {
                        "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}}
                    },
                }
            )
        }
        assert build_dependency_graph(schemas) == {"Node": frozenset({"Node"})}


class TestFindDanglingReferences:
    def test_none(self) -> None:
        assert find_dangling_references({"A": frozenset({"B"}), "B": frozenset()}) == []

    def test_sorted_missing_names(self) -> None:
        g = {"A": frozenset({"Zed", "B"}), "B": frozenset({"Alpha"})}
        assert find_dangling_references(g) == ["Alpha", "Zed"]
