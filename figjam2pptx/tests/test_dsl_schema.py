"""Tests for the node and export document models."""

import pytest
from pptx.dml.color import RGBColor
from pydantic import ValidationError

from figjam2pptx.dsl.schema import (
    RGB,
    ExtractionPayload,
    GradientPaint,
    ImagePaint,
    Node,
    NodeType,
    SolidPaint,
    UnknownPaint,
)


class TestNodeType:
    """Tests for NodeType."""

    def test_known_tag(self) -> None:
        assert NodeType.from_host("SHAPE_WITH_TEXT") == NodeType.SHAPE_WITH_TEXT

    @pytest.mark.parametrize("tag", ["SECTION", "LINE", "STAMP", ""])
    def test_unknown_tag(self, tag: str) -> None:
        assert NodeType.from_host(tag) == NodeType.OTHER

    def test_containers(self) -> None:
        containers = {t for t in NodeType if t.is_container}
        assert containers == {NodeType.GROUP, NodeType.FRAME}


class TestRGB:
    """Tests for RGB."""

    def test_rgb_color(self) -> None:
        assert RGB(r=1, g=2, b=3).rgb_color == RGBColor(1, 2, 3)

    @pytest.mark.parametrize("value", [-1, 256])
    def test_channel_bounds(self, value: int) -> None:
        with pytest.raises(ValidationError):
            RGB(r=value, g=0, b=0)


class TestNode:
    """Tests for Node."""

    def test_minimal(self) -> None:
        node = Node(id="1", type=NodeType.RECTANGLE)
        assert node.x == 0
        assert node.visible is True
        assert node.fills is None

    def test_container_requires_children(self) -> None:
        with pytest.raises(ValidationError, match="requires a children list"):
            Node(id="1", type=NodeType.GROUP)

    def test_leaf_rejects_children(self) -> None:
        with pytest.raises(ValidationError, match="cannot have children"):
            Node(id="1", type=NodeType.TEXT, children=[])

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Node(id="1", type=NodeType.RECTANGLE, width=-1)

    def test_frozen(self) -> None:
        node = Node(id="1", type=NodeType.RECTANGLE)
        with pytest.raises(ValidationError):
            node.x = 10

    def test_camel_case_aliases(self) -> None:
        """Test nodes validate from and dump to camelCase keys."""
        node = Node.model_validate({
            "id": "1",
            "type": "RECTANGLE",
            "rotationDegrees": 30,
            "strokeWeight": 2,
            "cornerRadius": 4,
        })
        assert node.rotation_degrees == 30
        dumped = node.model_dump(by_alias=True, exclude_none=True)
        assert dumped["strokeWeight"] == 2
        assert dumped["cornerRadius"] == 4
        assert "stroke_weight" not in dumped

    def test_ints_stay_ints(self) -> None:
        node = Node(id="1", type=NodeType.RECTANGLE, x=100, width=10.5)
        assert isinstance(node.x, int)
        assert node.width == 10.5

    def test_walk(self) -> None:
        leaf = Node(id="leaf", type=NodeType.TEXT)
        inner = Node(id="inner", type=NodeType.GROUP, children=[leaf])
        outer = Node(id="outer", type=NodeType.FRAME, children=[inner, Node(id="r", type=NodeType.RECTANGLE)])
        assert [n.id for n in outer.walk()] == ["outer", "inner", "leaf", "r"]


class TestPaintUnion:
    """Tests for the discriminated paint union."""

    def test_payload_paints_resolve_by_type(self) -> None:
        payload = ExtractionPayload.model_validate({
            "nodes": [{
                "id": "1",
                "type": "RECTANGLE",
                "fills": [
                    {"type": "solid", "color": {"r": 1, "g": 2, "b": 3}, "opacity": 0.5},
                    {"type": "image", "imageHash": "abc", "scaleMode": "FILL"},
                    {
                        "type": "gradient",
                        "gradientType": "GRADIENT_LINEAR",
                        "gradientStops": [{"position": 0, "color": {"r": 0, "g": 0, "b": 0, "a": 0.5}}],
                    },
                    {"type": "unknown", "hostType": "VIDEO"},
                ],
            }],
            "pageInfo": {"name": "P", "width": 1, "height": 2},
        })

        fills = payload.nodes[0].fills
        assert isinstance(fills[0], SolidPaint)
        assert isinstance(fills[1], ImagePaint)
        assert isinstance(fills[2], GradientPaint)
        assert isinstance(fills[3], UnknownPaint)
        assert fills[2].gradient_stops[0].color.a == 0.5
        assert payload.page_info.height == 2

    def test_rejects_unknown_discriminator(self) -> None:
        with pytest.raises(ValidationError):
            Node.model_validate({"id": "1", "type": "RECTANGLE", "fills": [{"type": "pattern"}]})

    def test_opacity_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SolidPaint(color=RGB(r=0, g=0, b=0), opacity=1.5)
