"""PPTX preview generation from the extracted node tree.

A best-effort, single-slide rendition: each node becomes one PowerPoint
shape, groups and frames become group shapes. Image fills are drawn as
placeholders.
"""

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Union

from pptx import Presentation
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE

from figjam2pptx.config import get_settings
from figjam2pptx.dsl.schema import Node, NodeType, PageInfo
from figjam2pptx.renderer.style_renderer import StyleRenderer
from figjam2pptx.units import EMU_PER_INCH, SLIDE_HEIGHT_EMU, SLIDE_WIDTH_EMU, px_to_length, to_emu


# PowerPoint refuses slides larger than 56 inches
MAX_SLIDE_EMU = 56 * EMU_PER_INCH

# Map polygon side counts to MSO shapes
POLYGON_SHAPE_MAP: dict[int, MSO_SHAPE] = {
    3: MSO_SHAPE.ISOSCELES_TRIANGLE,
    4: MSO_SHAPE.DIAMOND,
    5: MSO_SHAPE.REGULAR_PENTAGON,
    6: MSO_SHAPE.HEXAGON,
    7: MSO_SHAPE.HEPTAGON,
    8: MSO_SHAPE.OCTAGON,
    10: MSO_SHAPE.DECAGON,
    12: MSO_SHAPE.DODECAGON,
}

# Map FigJam shape-with-text kinds to MSO shapes
SHAPE_WITH_TEXT_MAP: dict[str, MSO_SHAPE] = {
    "SQUARE": MSO_SHAPE.RECTANGLE,
    "ELLIPSE": MSO_SHAPE.OVAL,
    "ROUNDED_RECTANGLE": MSO_SHAPE.ROUNDED_RECTANGLE,
    "DIAMOND": MSO_SHAPE.DIAMOND,
    "TRIANGLE_UP": MSO_SHAPE.ISOSCELES_TRIANGLE,
    "TRIANGLE_DOWN": MSO_SHAPE.FLOWCHART_MERGE,
    "PARALLELOGRAM_RIGHT": MSO_SHAPE.PARALLELOGRAM,
    "PARALLELOGRAM_LEFT": MSO_SHAPE.PARALLELOGRAM,
    "ENG_DATABASE": MSO_SHAPE.CAN,
    "ENG_QUEUE": MSO_SHAPE.FLOWCHART_DIRECT_ACCESS_STORAGE,
    "ENG_FILE": MSO_SHAPE.FLOWCHART_DOCUMENT,
    "ENG_FOLDER": MSO_SHAPE.FOLDED_CORNER,
    "TRAPEZOID": MSO_SHAPE.TRAPEZOID,
    "PREDEFINED_PROCESS": MSO_SHAPE.FLOWCHART_PREDEFINED_PROCESS,
    "DOCUMENT_SINGLE": MSO_SHAPE.FLOWCHART_DOCUMENT,
    "DOCUMENT_MULTIPLE": MSO_SHAPE.FLOWCHART_MULTIDOCUMENT,
    "MANUAL_INPUT": MSO_SHAPE.FLOWCHART_MANUAL_INPUT,
    "HEXAGON": MSO_SHAPE.HEXAGON,
    "CHEVRON": MSO_SHAPE.CHEVRON,
    "PENTAGON": MSO_SHAPE.REGULAR_PENTAGON,
    "OCTAGON": MSO_SHAPE.OCTAGON,
    "STAR": MSO_SHAPE.STAR_5_POINT,
    "PLUS": MSO_SHAPE.CROSS,
    "ARROW_LEFT": MSO_SHAPE.LEFT_ARROW,
    "ARROW_RIGHT": MSO_SHAPE.RIGHT_ARROW,
    "SUMMING_JUNCTION": MSO_SHAPE.FLOWCHART_SUMMING_JUNCTION,
    "OR": MSO_SHAPE.FLOWCHART_OR,
    "SPEECH_BUBBLE": MSO_SHAPE.ROUNDED_RECTANGULAR_CALLOUT,
    "INTERNAL_STORAGE": MSO_SHAPE.FLOWCHART_INTERNAL_STORAGE,
}


class PPTXWriter:
    """Generates a one-slide PPTX preview from extracted nodes."""

    def __init__(self, dpi: int | None = None, margin_px: float = 48) -> None:
        """Initialize the PPTX writer.

        Args:
            dpi: Canvas pixels per inch; defaults to the configured value.
            margin_px: Margin around the selection, in canvas pixels.
        """
        self.dpi = dpi if dpi is not None else get_settings().dpi
        self.margin_px = margin_px
        self.style_renderer = StyleRenderer(self.dpi)

    def write(
        self,
        nodes: Iterable[Node],
        page_info: PageInfo,
        output: Union[str, Path, BinaryIO, None] = None,
    ) -> bytes | None:
        """Write nodes to a PPTX file.

        Args:
            nodes: Extracted top-level nodes.
            page_info: Page snapshot; its name is stored as the presentation title.
            output: Output path, file object, or None to return bytes.

        Returns:
            PPTX bytes if output is None, otherwise None.
        """
        nodes = list(nodes)
        prs = self.create_presentation(nodes)
        prs.core_properties.title = page_info.name
        slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank layout

        left = min((node.x for node in nodes), default=0)
        top = min((node.y for node in nodes), default=0)
        offset = (self.margin_px - left, self.margin_px - top)

        for node in nodes:
            self.render_node(slide.shapes, node, offset)

        if output is None:
            buffer = BytesIO()
            prs.save(buffer)
            buffer.seek(0)
            return buffer.read()
        elif isinstance(output, (str, Path)):
            prs.save(str(output))
            return None
        else:
            prs.save(output)
            return None

    def create_presentation(self, nodes: list[Node]) -> Presentation:
        """Create a presentation whose slide fits the selection.

        The slide is never smaller than 16:9 default and never larger than
        PowerPoint's limit.
        """
        prs = Presentation()
        if nodes:
            span_x = max(n.x + n.width for n in nodes) - min(n.x for n in nodes)
            span_y = max(n.y + n.height for n in nodes) - min(n.y for n in nodes)
            width = to_emu(span_x + 2 * self.margin_px, self.dpi)
            height = to_emu(span_y + 2 * self.margin_px, self.dpi)
        else:
            width = height = 0
        prs.slide_width = min(MAX_SLIDE_EMU, max(SLIDE_WIDTH_EMU, width))
        prs.slide_height = min(MAX_SLIDE_EMU, max(SLIDE_HEIGHT_EMU, height))
        return prs

    def render_node(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        """Render a node into a shape collection.

        Args:
            shapes: Slide or group shape collection.
            node: The node to render.
            offset: Pixel offset applied to the node's own coordinates.

        Returns:
            The created python-pptx shape.
        """
        if node.type in (NodeType.RECTANGLE, NodeType.ELLIPSE, NodeType.POLYGON,
                         NodeType.SHAPE_WITH_TEXT, NodeType.STICKY):
            pptx_shape = self._render_auto_shape(shapes, node, offset)
        elif node.type == NodeType.TEXT:
            pptx_shape = self._render_text_box(shapes, node, offset)
        elif node.type == NodeType.CONNECTOR:
            pptx_shape = self._render_connector(shapes, node, offset)
        elif node.type.is_container:
            pptx_shape = self._render_group(shapes, node, offset)
        else:
            pptx_shape = self._render_placeholder(shapes, node, offset)

        pptx_shape.name = node.name or node.id
        if not node.visible:
            pptx_shape._element._nvXxPr.cNvPr.set("hidden", "1")
        return pptx_shape

    def _box(self, node: Node, offset: tuple[float, float]) -> tuple:
        return (
            px_to_length(node.x + offset[0], self.dpi),
            px_to_length(node.y + offset[1], self.dpi),
            px_to_length(node.width, self.dpi),
            px_to_length(node.height, self.dpi),
        )

    def _mso_shape(self, node: Node) -> MSO_SHAPE:
        """Pick the auto shape for a geometric node."""
        if node.type == NodeType.ELLIPSE:
            return MSO_SHAPE.OVAL
        if node.type == NodeType.POLYGON and node.shape_type:
            sides = node.shape_type.rsplit("-", 1)[-1]
            if sides.isdigit():
                return POLYGON_SHAPE_MAP.get(int(sides), MSO_SHAPE.RECTANGLE)
        if node.type == NodeType.SHAPE_WITH_TEXT:
            return SHAPE_WITH_TEXT_MAP.get(node.shape_type or "", MSO_SHAPE.RECTANGLE)
        if node.type == NodeType.RECTANGLE and node.corner_radius:
            return MSO_SHAPE.ROUNDED_RECTANGLE
        return MSO_SHAPE.RECTANGLE

    def _render_auto_shape(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        pptx_shape = shapes.add_shape(self._mso_shape(node), *self._box(node, offset))

        # FigJam rotates counterclockwise, PowerPoint clockwise
        if node.rotation_degrees:
            pptx_shape.rotation = -node.rotation_degrees % 360

        if node.type == NodeType.RECTANGLE and node.corner_radius:
            short_side = min(node.width, node.height)
            if short_side > 0:
                pptx_shape.adjustments[0] = min(0.5, node.corner_radius / short_side)

        self.style_renderer.apply_fill(pptx_shape, node.fills[0] if node.fills else None)
        self.style_renderer.apply_stroke(
            pptx_shape,
            node.strokes[0] if node.strokes else None,
            node.stroke_weight,
        )

        if node.text:
            pptx_shape.text_frame.text = node.text
            pptx_shape.text_frame.word_wrap = True
        return pptx_shape

    def _render_text_box(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        text_box = shapes.add_textbox(*self._box(node, offset))
        if node.rotation_degrees:
            text_box.rotation = -node.rotation_degrees % 360

        text_box.text_frame.text = node.text or ""
        text_box.text_frame.word_wrap = True
        # Text node fills color the glyphs, not the box
        self.style_renderer.apply_text_color(text_box, node.fills[0] if node.fills else None)
        return text_box

    def _render_connector(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        start, end = node.connector_start, node.connector_end
        if start is None or end is None or (start.x, start.y) == (end.x, end.y):
            # Attached ends have no position; span the bounding box instead
            begin = (node.x, node.y)
            finish = (node.x + node.width, node.y + node.height)
        else:
            begin = (start.x, start.y)
            finish = (end.x, end.y)

        connector = shapes.add_connector(
            MSO_CONNECTOR.STRAIGHT,
            px_to_length(begin[0] + offset[0], self.dpi),
            px_to_length(begin[1] + offset[1], self.dpi),
            px_to_length(finish[0] + offset[0], self.dpi),
            px_to_length(finish[1] + offset[1], self.dpi),
        )
        self.style_renderer.apply_stroke(
            connector,
            node.strokes[0] if node.strokes else None,
            node.stroke_weight,
        )
        return connector

    def _render_group(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        """Render a group or frame and its children.

        Frame children are positioned relative to the frame; group children
        share the group's parent coordinates.
        """
        group = shapes.add_group_shape()
        child_offset = offset
        if node.type == NodeType.FRAME:
            child_offset = (offset[0] + node.x, offset[1] + node.y)

        for child in node.children or ():
            self.render_node(group.shapes, child, child_offset)
        return group

    def _render_placeholder(self, shapes: Any, node: Node, offset: tuple[float, float]) -> Any:
        """Unsupported nodes keep their footprint as an empty outline."""
        placeholder = shapes.add_shape(MSO_SHAPE.RECTANGLE, *self._box(node, offset))
        placeholder.fill.background()
        return placeholder
