"""Apply extracted fills and strokes to python-pptx shapes."""

from typing import Any

from lxml import etree
from pptx.dml.color import RGBColor
from pptx.oxml.ns import qn

from figjam2pptx.dsl.schema import GradientPaint, ImagePaint, Paint, SolidPaint
from figjam2pptx.units import DEFAULT_DPI, px_to_length


# Placeholder color for image fills (image bytes are never embedded)
IMAGE_PLACEHOLDER_COLOR = RGBColor(0xCC, 0xCC, 0xCC)


class StyleRenderer:
    """Applies node paints to PowerPoint shapes."""

    def __init__(self, dpi: int = DEFAULT_DPI) -> None:
        self.dpi = dpi

    def apply_fill(self, pptx_shape: Any, paint: Paint | None) -> None:
        """Apply the top fill of a node to a shape.

        Args:
            pptx_shape: The python-pptx shape object.
            paint: Top paint of the node, or None for no fill.
        """
        if paint is None:
            pptx_shape.fill.background()
        elif isinstance(paint, SolidPaint):
            pptx_shape.fill.solid()
            pptx_shape.fill.fore_color.rgb = paint.color.rgb_color
            if paint.opacity < 1.0:
                self._set_fill_transparency(pptx_shape, paint.opacity)
        elif isinstance(paint, GradientPaint):
            self._apply_gradient_fill(pptx_shape, paint)
        elif isinstance(paint, ImagePaint):
            pptx_shape.fill.solid()
            pptx_shape.fill.fore_color.rgb = IMAGE_PLACEHOLDER_COLOR
        else:
            pptx_shape.fill.background()

    def _apply_gradient_fill(self, pptx_shape: Any, paint: GradientPaint) -> None:
        """Apply gradient fill to a shape.

        python-pptx cannot add gradient stops, so the default two stops
        take the first and last extracted stops.
        """
        pptx_shape.fill.gradient()
        if not paint.gradient_stops:
            return

        gradient_stops = pptx_shape.fill.gradient_stops
        chosen = [paint.gradient_stops[0], paint.gradient_stops[-1]]
        for gs, stop in zip(gradient_stops, chosen):
            gs.color.rgb = stop.color.rgb_color
            gs.position = min(1.0, max(0.0, stop.position))

    def apply_stroke(self, pptx_shape: Any, paint: Paint | None, weight: float | None) -> None:
        """Apply the top stroke of a node to a shape outline.

        Args:
            pptx_shape: The python-pptx shape object.
            paint: Top stroke paint, or None for no outline.
            weight: Stroke weight in canvas pixels.
        """
        line = pptx_shape.line
        if not isinstance(paint, SolidPaint) or weight == 0:
            line.fill.background()
            return

        line.color.rgb = paint.color.rgb_color
        line.width = px_to_length(weight if weight is not None else 1, self.dpi)

    def apply_text_color(self, pptx_shape: Any, paint: Paint | None) -> None:
        """Color every run of a shape's text with a solid paint."""
        if not isinstance(paint, SolidPaint) or not pptx_shape.has_text_frame:
            return
        for paragraph in pptx_shape.text_frame.paragraphs:
            for run in paragraph.runs:
                run.font.color.rgb = paint.color.rgb_color

    def _set_fill_transparency(self, pptx_shape: Any, alpha: float) -> None:
        """Set fill transparency via XML.

        Args:
            pptx_shape: The python-pptx shape object.
            alpha: Opacity value (0-1).
        """
        spPr = pptx_shape._element.find(qn("p:spPr"))
        if spPr is None:
            return

        solidFill = spPr.find(qn("a:solidFill"))
        if solidFill is None:
            return

        srgbClr = solidFill.find(qn("a:srgbClr"))
        if srgbClr is None:
            return

        # Remove existing alpha
        for existing in srgbClr.findall(qn("a:alpha")):
            srgbClr.remove(existing)

        alpha_elem = etree.SubElement(srgbClr, qn("a:alpha"))
        alpha_elem.set("val", str(int(alpha * 100000)))
