"""Tests for the rendered diagram wrapper."""

from __future__ import annotations

from archflow.animation.svg import (
    EDGE_STYLE,
    NODE_FILTER,
    NODE_TRANSFORM,
    format_style,
    parse_style,
)


class TestStyleHelpers:
    def test_parse(self):
        assert parse_style("fill:none; stroke : #333 ;;") == {"fill": "none", "stroke": "#333"}

    def test_parse_empty(self):
        assert parse_style(None) == {}

    def test_format(self):
        assert format_style({"fill": "none", "stroke-width": "4px"}) == "fill: none; stroke-width: 4px"


class TestParsing:
    def test_nodes_and_labels(self, diagram):
        labels = [node.label for node in diagram.nodes]
        assert labels == [
            "🖥️ Client Browser",
            "⚙️ API Server Express",
            "🗄️ Database PostgreSQL",
            "Channels Group Chat",
        ]

    def test_edges_in_document_order(self, diagram):
        assert [edge.path.get("id") for edge in diagram.edges] == ["L_Client_API_0", "L_API_DB_1", "L_DB_API_2"]
        assert diagram.edge_at(3) is None
        assert diagram.edge_at(-1) is None

    def test_shapes(self, diagram):
        assert diagram.find_node("Client").shape.name == "rect"
        assert diagram.find_node("Database").shape.name == "path"

    def test_legacy_markup(self, legacy_diagram):
        assert [node.label for node in legacy_diagram.nodes] == ["Queue Worker", "Decision"]
        assert legacy_diagram.find_node("Queue").shape.name == "circle"
        assert legacy_diagram.find_node("decision").shape.name == "polygon"
        assert len(legacy_diagram.edges) == 2


class TestFindNode:
    def test_prefix_on_tokens(self, diagram):
        assert diagram.find_node("API Server").id == "flowchart-API-1"
        assert diagram.find_node("client browser").id == "flowchart-Client-0"

    def test_no_substring_matches(self, diagram):
        assert diagram.find_node("Chat") is None
        assert diagram.find_node("Server") is None

    def test_empty_query(self, diagram):
        assert diagram.find_node("") is None


class TestNodeEmphasis:
    def test_emphasize_and_restore(self, diagram):
        node = diagram.find_node("Client")
        original_style = node.shape["style"]

        node.emphasize()
        assert node.shape["filter"] == NODE_FILTER
        assert node.shape["transform"] == NODE_TRANSFORM
        style = parse_style(node.shape["style"])
        assert style["transform-origin"] == "center"
        assert style["fill"] == "#3498db !important"
        assert diagram.emphasized_nodes() == [node]

        diagram.clear_highlights()
        assert node.shape["style"] == original_style
        assert "filter" not in node.shape.attrs
        assert "transform" not in node.shape.attrs
        assert diagram.emphasized_nodes() == []

    def test_restore_removes_added_style(self, diagram):
        node = diagram.find_node("API Server")
        node.emphasize()
        node.restore()
        assert "style" not in node.shape.attrs

    def test_serialized_state(self, diagram):
        diagram.find_node("Database").emphasize()
        assert NODE_FILTER in diagram.to_svg()

        diagram.clear_highlights()
        assert NODE_FILTER not in diagram.to_svg()


class TestEdgeEmphasis:
    def test_marching_dashes(self, diagram):
        edge = diagram.edge_at(0)
        edge.emphasize()

        style = parse_style(edge.path["style"])
        assert style["stroke"] == EDGE_STYLE["stroke"]
        assert style["stroke-width"] == "4px"
        assert style["stroke-dasharray"] == "10 5"
        assert style["stroke-dashoffset"] == "0px"
        assert style["fill"] == "none"

        edge.advance_dash()
        edge.advance_dash()
        assert edge.dash_offset == -4
        assert parse_style(edge.path["style"])["stroke-dashoffset"] == "-4px"

    def test_restore_original_style(self, diagram):
        edge = diagram.edge_at(0)
        edge.emphasize()
        diagram.clear_highlights()

        assert edge.path["style"] == "fill:none;"
        assert edge.dash_offset == 0
        assert diagram.emphasized_edges() == []

    def test_edge_without_style(self, diagram):
        edge = diagram.edge_at(2)
        edge.emphasize()
        edge.restore()
        assert "style" not in edge.path.attrs

    def test_advance_ignored_when_not_emphasized(self, diagram):
        edge = diagram.edge_at(1)
        edge.advance_dash()
        assert edge.dash_offset == 0
        assert edge.path["style"] == "fill:none;"
