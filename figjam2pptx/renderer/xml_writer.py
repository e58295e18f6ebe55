"""
xml_writer.py: XML export of the extracted node tree.

Serializes the Node tree directly (not the flattened shape records), nesting
group and frame children inside a <group> element of their parent shape.
Output is built as text so escaping and CDATA handling stay byte-exact.
"""

from datetime import datetime
from typing import Iterable

from figjam2pptx.dsl.schema import GradientPaint, ImagePaint, Node, PageInfo, Paint, SolidPaint
from figjam2pptx.renderer.formatting import cdata, escape_xml, format_number, format_timestamp
from figjam2pptx.renderer.shape_mapper import map_node_type


# =============================================================================
# CONSTANTS
# =============================================================================

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
XML_COMMENT = "<!-- FigJam to PowerPoint Export -->"
PRESENTATION_NS = "http://schemas.figjam2pptx.com/presentation"

INDENT = "  "
DEFAULT_STROKE_WEIGHT = 1


# =============================================================================
# XML SERIALIZER
# =============================================================================

class XMLSerializer:
    """
    Renders extracted nodes to the XML export format.

    The serializer is stateless; each serialize() call builds a new document.
    """

    def serialize(
        self,
        nodes: Iterable[Node],
        page_info: PageInfo,
        now: datetime | None = None,
    ) -> str:
        """
        Serialize nodes to an XML document.

        Args:
            nodes: Extracted top-level nodes
            page_info: Page snapshot
            now: Export timestamp; the current time if omitted

        Returns:
            XML document text
        """
        nodes = list(nodes)
        lines = [
            XML_DECLARATION,
            XML_COMMENT,
            f'<presentation xmlns="{PRESENTATION_NS}">',
            f"{INDENT}<metadata>",
            f"{INDENT * 2}<exportDate>{format_timestamp(now)}</exportDate>",
            f"{INDENT * 2}<sourcePage>{escape_xml(page_info.name)}</sourcePage>",
            f"{INDENT * 2}<objectCount>{len(nodes)}</objectCount>",
            f"{INDENT}</metadata>",
            f'{INDENT}<slide width="{format_number(page_info.width)}" '
            f'height="{format_number(page_info.height)}">',
        ]

        for node in nodes:
            self._render_node(lines, node, 2)

        lines.append(f"{INDENT}</slide>")
        lines.append("</presentation>")
        return "\n".join(lines)

    # =========================================================================
    # SHAPES
    # =========================================================================

    def _render_node(self, lines: list[str], node: Node, level: int) -> None:
        """Append one <shape> element, recursing into children."""
        pad = INDENT * level
        inner = INDENT * (level + 1)

        lines.append(f"{pad}<shape>")
        lines.append(f"{inner}<type>{escape_xml(map_node_type(node.type))}</type>")
        lines.append(f"{inner}<id>{escape_xml(node.id)}</id>")
        lines.append(f"{inner}<name>{escape_xml(node.name)}</name>")

        self._render_geometry(lines, node, level + 1)

        if node.fills:
            self._render_fill(lines, node.fills[0], level + 1)

        if node.strokes:
            self._render_stroke(lines, node, level + 1)

        if node.text:
            lines.append(f"{inner}<text>{cdata(node.text)}</text>")

        if node.corner_radius is not None or node.shape_type:
            lines.append(f"{inner}<properties>")
            if node.corner_radius is not None:
                lines.append(f"{inner}{INDENT}<cornerRadius>{format_number(node.corner_radius)}</cornerRadius>")
            if node.shape_type:
                lines.append(f"{inner}{INDENT}<shapeType>{escape_xml(node.shape_type)}</shapeType>")
            lines.append(f"{inner}</properties>")

        if node.children:
            lines.append(f"{inner}<group>")
            for child in node.children:
                self._render_node(lines, child, level + 2)
            lines.append(f"{inner}</group>")

        lines.append(f"{pad}</shape>")

    def _render_geometry(self, lines: list[str], node: Node, level: int) -> None:
        pad = INDENT * level
        lines.append(f"{pad}<geometry>")
        lines.append(f'{pad}{INDENT}<position x="{format_number(node.x)}" y="{format_number(node.y)}"/>')
        lines.append(
            f'{pad}{INDENT}<size width="{format_number(node.width)}" height="{format_number(node.height)}"/>'
        )
        lines.append(f'{pad}{INDENT}<rotation degrees="{format_number(node.rotation_degrees)}"/>')
        lines.append(f"{pad}</geometry>")

    # =========================================================================
    # PAINTS
    # =========================================================================

    def _render_fill(self, lines: list[str], paint: Paint, level: int) -> None:
        """Render the top fill only."""
        pad = INDENT * level
        inner = pad + INDENT
        lines.append(f"{pad}<fill>")

        if isinstance(paint, SolidPaint):
            lines.append(f"{inner}<solid {self._color_attrs(paint)}/>")
        elif isinstance(paint, GradientPaint):
            lines.append(f'{inner}<gradient type="{escape_xml(paint.gradient_type)}">')
            for stop in paint.gradient_stops:
                lines.append(
                    f'{inner}{INDENT}<stop position="{format_number(stop.position)}" '
                    f'r="{stop.color.r}" g="{stop.color.g}" b="{stop.color.b}" '
                    f'a="{format_number(stop.color.a)}"/>'
                )
            lines.append(f"{inner}</gradient>")
        elif isinstance(paint, ImagePaint):
            attrs = []
            if paint.image_hash is not None:
                attrs.append(f'imageHash="{escape_xml(paint.image_hash)}"')
            if paint.scale_mode is not None:
                attrs.append(f'scaleMode="{escape_xml(paint.scale_mode)}"')
            attrs.append(f'opacity="{format_number(paint.opacity)}"')
            lines.append(f"{inner}<image {' '.join(attrs)}/>")
        else:
            lines.append(f"{inner}<unknown/>")

        lines.append(f"{pad}</fill>")

    def _render_stroke(self, lines: list[str], node: Node, level: int) -> None:
        """Render the top stroke only."""
        pad = INDENT * level
        weight = node.stroke_weight if node.stroke_weight is not None else DEFAULT_STROKE_WEIGHT
        lines.append(f'{pad}<stroke weight="{format_number(weight)}">')

        paint = node.strokes[0]
        if isinstance(paint, SolidPaint):
            lines.append(f"{pad}{INDENT}<color {self._color_attrs(paint)}/>")

        lines.append(f"{pad}</stroke>")

    def _color_attrs(self, paint: SolidPaint) -> str:
        color = paint.color
        return f'r="{color.r}" g="{color.g}" b="{color.b}" opacity="{format_number(paint.opacity)}"'


def serialize_xml(
    nodes: Iterable[Node],
    page_info: PageInfo,
    now: datetime | None = None,
) -> str:
    """Module-level shortcut for XMLSerializer().serialize."""
    return XMLSerializer().serialize(nodes, page_info, now)
