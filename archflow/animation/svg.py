"""
Rendered Mermaid SVG wrapper.

Mermaid emits one ``g.node`` group per node (label in ``.nodeLabel`` when
HTML labels are on, plain ``<text>`` otherwise) and one ``path`` per edge,
classed ``flowchart-link`` in current releases. Edges are kept in document
order, which is declaration order in the Mermaid source.

Every node shape and edge path has its original presentation attributes
captured at load so emphasis can be removed exactly.
"""

import logging

from bs4 import BeautifulSoup, Tag

from archflow.animation.matching import label_matches

logger = logging.getLogger(__name__)

NODE_SELECTOR = ".node"
EDGE_SELECTOR = "path.flowchart-link"
LEGACY_EDGE_SELECTOR = ".edgePath path, path.path"
SHAPE_TAGS = ("rect", "circle", "polygon", "path")

NODE_FILTER = "drop-shadow(0 0 20px rgba(231, 76, 60, 0.9))"
NODE_TRANSFORM = "scale(1.1)"
NODE_STYLE = {"transform-origin": "center", "transition": "all 0.3s ease"}

EDGE_STYLE = {
    "stroke": "#F59E0B",
    "stroke-width": "4px",
    "filter": "drop-shadow(0 0 8px rgba(245, 158, 11, 0.8))",
    "transition": "all 0.2s ease",
    "stroke-dasharray": "10 5",
}
DASH_STEP = 2


def parse_style(style: str | None) -> dict[str, str]:
    """Parse an inline ``style`` attribute into an ordered dict."""
    declarations: dict[str, str] = {}
    for part in (style or "").split(";"):
        name, sep, value = part.partition(":")
        if sep and name.strip():
            declarations[name.strip()] = value.strip()
    return declarations


def format_style(declarations: dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


def _restore_attr(tag: Tag, name: str, value: str | None) -> None:
    if value is None:
        if name in tag.attrs:
            del tag[name]
    else:
        tag[name] = value


class RenderedNode:
    """One ``g.node`` group and the shape that receives emphasis."""

    def __init__(self, group: Tag) -> None:
        self.group = group
        self.id = group.get("id")
        label_tag = group.select_one(".nodeLabel")
        source = label_tag if label_tag is not None else group
        self.label = " ".join(source.get_text(" ").split())

        self.shape: Tag | None = None
        for name in SHAPE_TAGS:
            shape = group.find(name)
            if shape is not None:
                self.shape = shape
                break

        self._original: dict[str, str | None] = {}
        if self.shape is not None:
            self._original = {name: self.shape.get(name) for name in ("filter", "transform", "style")}
        self.emphasized = False

    def matches(self, query: str) -> bool:
        return label_matches(query, self.label)

    def emphasize(self) -> None:
        if self.shape is None:
            return
        self.shape["filter"] = NODE_FILTER
        self.shape["transform"] = NODE_TRANSFORM
        style = parse_style(self._original["style"])
        style.update(NODE_STYLE)
        self.shape["style"] = format_style(style)
        self.emphasized = True

    def restore(self) -> None:
        if self.shape is None:
            return
        for name, value in self._original.items():
            _restore_attr(self.shape, name, value)
        self.emphasized = False

    def __repr__(self) -> str:
        return f"RenderedNode(id={self.id!r}, label={self.label!r})"


class RenderedEdge:
    """One edge path; emphasis is a marching dashed stroke."""

    def __init__(self, path: Tag, index: int) -> None:
        self.path = path
        self.index = index
        self._original_style: str | None = path.get("style")
        self.dash_offset = 0
        self.emphasized = False

    def emphasize(self) -> None:
        self.dash_offset = 0
        self._apply()
        self.emphasized = True

    def advance_dash(self, step: int = DASH_STEP) -> None:
        """Move the dash pattern along the path by ``step`` pixels."""
        if not self.emphasized:
            return
        self.dash_offset -= step
        self._apply()

    def _apply(self) -> None:
        style = parse_style(self._original_style)
        style.update(EDGE_STYLE)
        style["stroke-dashoffset"] = f"{self.dash_offset}px"
        self.path["style"] = format_style(style)

    def restore(self) -> None:
        _restore_attr(self.path, "style", self._original_style)
        self.dash_offset = 0
        self.emphasized = False


class SvgDiagram:
    """
    A rendered diagram the animation engine can highlight.

    Args:
        svg: SVG document text as produced by Mermaid
    """

    def __init__(self, svg: str) -> None:
        self.soup = BeautifulSoup(svg, "html.parser")
        self.nodes = [RenderedNode(group) for group in self.soup.select(NODE_SELECTOR)]

        paths = self.soup.select(EDGE_SELECTOR) or self.soup.select(LEGACY_EDGE_SELECTOR)
        self.edges = [RenderedEdge(path, index) for index, path in enumerate(paths)]

        logger.debug(f"Loaded diagram with {len(self.nodes)} nodes and {len(self.edges)} edges")

    def find_node(self, query: str) -> RenderedNode | None:
        """First node whose label starts with ``query`` and that has a shape."""
        for node in self.nodes:
            if node.shape is not None and node.matches(query):
                return node
        return None

    def edge_at(self, index: int) -> RenderedEdge | None:
        if 0 <= index < len(self.edges):
            return self.edges[index]
        return None

    def emphasized_nodes(self) -> list[RenderedNode]:
        return [node for node in self.nodes if node.emphasized]

    def emphasized_edges(self) -> list[RenderedEdge]:
        return [edge for edge in self.edges if edge.emphasized]

    def clear_highlights(self) -> None:
        """Restore every node and edge to its captured original state."""
        for node in self.nodes:
            node.restore()
        for edge in self.edges:
            edge.restore()

    def to_svg(self) -> str:
        return str(self.soup)
