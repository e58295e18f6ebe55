"""Tests for paint normalization."""

from types import SimpleNamespace

import pytest

from figjam2pptx.dsl.schema import GradientPaint, ImagePaint, SolidPaint, UnknownPaint
from figjam2pptx.parser import MIXED, PaintNormalizer, normalize_paints


def _solid(r: float, g: float, b: float, **extra) -> dict:
    return {"type": "SOLID", "color": {"r": r, "g": g, "b": b}, **extra}


class TestMixedAndMissing:
    """Stacks that cannot be represented."""

    @pytest.mark.parametrize("raw", [MIXED, "mixed", None])
    def test_returns_empty_list(self, raw) -> None:
        """Test mixed or missing stacks normalize to nothing."""
        assert normalize_paints(raw) == []

    def test_non_sequence_returns_empty_list(self) -> None:
        """Test a mapping is not treated as a paint stack."""
        assert normalize_paints({"type": "SOLID"}) == []


class TestSolidPaint:
    """Tests for solid paints."""

    @pytest.fixture
    def normalizer(self) -> PaintNormalizer:
        return PaintNormalizer()

    def test_scales_channels(self, normalizer: PaintNormalizer) -> None:
        """Test 0-1 channels become 0-255 integers."""
        paint = normalizer.normalize_paints([_solid(1, 0.392, 0.2)])[0]
        assert isinstance(paint, SolidPaint)
        assert (paint.color.r, paint.color.g, paint.color.b) == (255, 100, 51)

    def test_rounds_half_away_from_zero(self, normalizer: PaintNormalizer) -> None:
        """Test 127.5 rounds up rather than to even."""
        paint = normalizer.normalize_paints([_solid(0.5, 0, 0)])[0]
        assert paint.color.r == 128

    def test_clamps_out_of_range(self, normalizer: PaintNormalizer) -> None:
        """Test channels outside 0-1 stay within 0-255."""
        paint = normalizer.normalize_paints([_solid(1.5, -0.2, 0)])[0]
        assert paint.color.r == 255
        assert paint.color.g == 0

    def test_opacity_defaults_to_one(self, normalizer: PaintNormalizer) -> None:
        """Test missing opacity means fully opaque."""
        paint = normalizer.normalize_paints([_solid(0, 0, 0)])[0]
        assert paint.opacity == 1

    def test_keeps_opacity(self, normalizer: PaintNormalizer) -> None:
        paint = normalizer.normalize_paints([_solid(0, 0, 0, opacity=0.25)])[0]
        assert paint.opacity == 0.25

    def test_channel_scaling_is_monotonic(self, normalizer: PaintNormalizer) -> None:
        """Test larger inputs never give smaller channels."""
        previous = -1
        for step in range(1001):
            value = step / 1000
            channel = normalizer.normalize_paints([_solid(value, 0, 0)])[0].color.r
            assert isinstance(channel, int)
            assert 0 <= channel <= 255
            assert channel >= previous
            previous = channel
        assert previous == 255


class TestPaintStack:
    """Tests for whole paint stacks."""

    def test_filters_invisible_paints(self) -> None:
        """Test paints flagged invisible are dropped."""
        paints = normalize_paints([
            _solid(1, 0, 0, visible=False),
            _solid(0, 1, 0),
            _solid(0, 0, 1, visible=True),
        ])
        assert len(paints) == 2
        assert paints[0].color.g == 255
        assert paints[1].color.b == 255

    def test_preserves_order(self) -> None:
        """Test the top paint stays first."""
        paints = normalize_paints([
            _solid(1, 0, 0),
            {"type": "IMAGE", "imageHash": "abc", "scaleMode": "FILL"},
            _solid(0, 0, 1),
        ])
        assert [p.type for p in paints] == ["solid", "image", "solid"]

    def test_accepts_attribute_objects(self) -> None:
        """Test live host paint objects work like mappings."""
        paint = SimpleNamespace(
            type="SOLID",
            visible=True,
            opacity=0.5,
            color=SimpleNamespace(r=0, g=1, b=0),
        )
        result = normalize_paints((paint,))
        assert result[0].color.g == 255
        assert result[0].opacity == 0.5


class TestOtherPaints:
    """Tests for image, gradient and unknown paints."""

    def test_image_passes_through(self) -> None:
        """Test image hash and scale mode are kept verbatim."""
        paint = normalize_paints([{"type": "IMAGE", "imageHash": "f00d", "scaleMode": "TILE"}])[0]
        assert isinstance(paint, ImagePaint)
        assert paint.image_hash == "f00d"
        assert paint.scale_mode == "TILE"
        assert paint.opacity == 1

    def test_image_without_hash(self) -> None:
        paint = normalize_paints([{"type": "IMAGE", "imageHash": None, "scaleMode": "FILL"}])[0]
        assert paint.image_hash is None

    @pytest.mark.parametrize(
        "kind",
        ["GRADIENT_LINEAR", "GRADIENT_RADIAL", "GRADIENT_ANGULAR", "GRADIENT_DIAMOND"],
    )
    def test_gradient(self, kind: str) -> None:
        """Test gradient stops are scaled and alpha is kept."""
        paint = normalize_paints([{
            "type": kind,
            "opacity": 0.8,
            "gradientStops": [
                {"position": 0, "color": {"r": 1, "g": 0, "b": 0, "a": 1}},
                {"position": 0.5, "color": {"r": 0, "g": 0.5, "b": 0, "a": 0.25}},
                {"position": 1, "color": {"r": 0, "g": 0, "b": 1, "a": 0}},
            ],
        }])[0]

        assert isinstance(paint, GradientPaint)
        assert paint.gradient_type == kind
        assert paint.opacity == 0.8
        assert [stop.position for stop in paint.gradient_stops] == [0, 0.5, 1]
        assert paint.gradient_stops[0].color.r == 255
        assert paint.gradient_stops[1].color.g == 128
        assert paint.gradient_stops[1].color.a == 0.25
        assert paint.gradient_stops[2].color.b == 255

    def test_unknown_kind_becomes_placeholder(self) -> None:
        """Test an unrecognized paint does not abort the stack."""
        paints = normalize_paints([{"type": "VIDEO"}, _solid(0, 0, 0)])
        assert isinstance(paints[0], UnknownPaint)
        assert paints[0].type == "unknown"
        assert paints[0].host_type == "VIDEO"
        assert isinstance(paints[1], SolidPaint)
