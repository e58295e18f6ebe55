"""Normalize host fills and strokes into Paint values."""

import logging
from collections.abc import Mapping
from typing import Any

from figjam2pptx.dsl.schema import (
    RGB,
    RGBA,
    GradientPaint,
    GradientStop,
    ImagePaint,
    Paint,
    SolidPaint,
    UnknownPaint,
)
from figjam2pptx.parser.host import as_number, get_field, get_sequence, is_mixed
from figjam2pptx.units import to_channel

logger = logging.getLogger(__name__)


GRADIENT_TYPES = (
    "GRADIENT_LINEAR",
    "GRADIENT_RADIAL",
    "GRADIENT_ANGULAR",
    "GRADIENT_DIAMOND",
)


class PaintNormalizer:
    """Converts host paint stacks into the intermediate Paint model."""

    def normalize_paints(self, raw_paints: Any) -> list[Paint]:
        """Normalize a host paint stack.

        Args:
            raw_paints: Sequence of host paints (top paint first), the host's
                mixed marker, or None.

        Returns:
            Visible paints in host order. Mixed or missing stacks give [].
        """
        if raw_paints is None or is_mixed(raw_paints):
            return []
        if isinstance(raw_paints, (str, bytes, Mapping)) or not hasattr(raw_paints, "__iter__"):
            return []

        result: list[Paint] = []
        for paint in raw_paints:
            if paint is None or get_field(paint, "visible") is False:
                continue
            result.append(self.normalize_paint(paint))
        return result

    def normalize_paint(self, paint: Any) -> Paint:
        """Normalize a single visible host paint.

        Args:
            paint: Host paint with a ``type`` tag.

        Returns:
            SolidPaint, ImagePaint, GradientPaint or UnknownPaint.
        """
        kind = get_field(paint, "type")

        if kind == "SOLID":
            return self._normalize_solid(paint)
        if kind == "IMAGE":
            return self._normalize_image(paint)
        if isinstance(kind, str) and (kind in GRADIENT_TYPES or kind.startswith("GRADIENT_")):
            return self._normalize_gradient(paint, kind)

        logger.debug(f"Unknown paint type: {kind!r}")
        return UnknownPaint(host_type=kind if isinstance(kind, str) else None)

    def _normalize_solid(self, paint: Any) -> SolidPaint:
        return SolidPaint(
            color=self._rgb(get_field(paint, "color")),
            opacity=self._opacity(paint),
        )

    def _normalize_image(self, paint: Any) -> ImagePaint:
        image_hash = get_field(paint, "imageHash")
        scale_mode = get_field(paint, "scaleMode")
        return ImagePaint(
            image_hash=image_hash if isinstance(image_hash, str) else None,
            scale_mode=scale_mode if isinstance(scale_mode, str) else None,
            opacity=self._opacity(paint),
        )

    def _normalize_gradient(self, paint: Any, kind: str) -> GradientPaint:
        stops = [
            GradientStop(
                position=as_number(get_field(stop, "position"), 0.0),
                color=self._rgba(get_field(stop, "color")),
            )
            for stop in get_sequence(paint, "gradientStops")
            if stop is not None
        ]
        return GradientPaint(
            gradient_type=kind,
            gradient_stops=stops,
            opacity=self._opacity(paint),
        )

    def _rgb(self, color: Any) -> RGB:
        """Scale a host 0-1 color to 0-255 channels."""
        return RGB(
            r=to_channel(as_number(get_field(color, "r"), 0)),
            g=to_channel(as_number(get_field(color, "g"), 0)),
            b=to_channel(as_number(get_field(color, "b"), 0)),
        )

    def _rgba(self, color: Any) -> RGBA:
        alpha = as_number(get_field(color, "a"), 1.0)
        rgb = self._rgb(color)
        return RGBA(r=rgb.r, g=rgb.g, b=rgb.b, a=min(1.0, max(0.0, alpha)))

    def _opacity(self, paint: Any) -> float:
        opacity = as_number(get_field(paint, "opacity"), None)
        if opacity is None:
            return 1
        return min(1, max(0, opacity))


_default_normalizer = PaintNormalizer()


def normalize_paints(raw_paints: Any) -> list[Paint]:
    """Module-level shortcut for PaintNormalizer.normalize_paints."""
    return _default_normalizer.normalize_paints(raw_paints)
