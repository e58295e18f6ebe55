"""Map extracted nodes to flat presentation shape records."""

from figjam2pptx.dsl.schema import (
    GradientPaint,
    ImagePaint,
    Node,
    NodeType,
    Position,
    ShapeFill,
    ShapeProperties,
    ShapeRecord,
    ShapeStroke,
    Size,
    SolidPaint,
)


# Map node types to presentation shape names
NODE_TYPE_MAP: dict[NodeType, str] = {
    NodeType.RECTANGLE: "rectangle",
    NodeType.ELLIPSE: "ellipse",
    NodeType.POLYGON: "polygon",
    NodeType.SHAPE_WITH_TEXT: "shape",
    NodeType.STICKY: "textbox",
    NodeType.TEXT: "text",
    NodeType.CONNECTOR: "line",
    NodeType.GROUP: "group",
    NodeType.FRAME: "frame",
}

DEFAULT_SHAPE_TYPE = "shape"


def map_node_type(node_type: NodeType) -> str:
    """Presentation name for a node type; unlisted types become 'shape'."""
    return NODE_TYPE_MAP.get(node_type, DEFAULT_SHAPE_TYPE)


class ShapeMapper:
    """Converts Node values into ShapeRecords for the JSON export.

    Only the first fill and the first stroke of a node are kept.
    """

    def to_shape_record(self, node: Node) -> ShapeRecord:
        """Convert a node to a shape record.

        Args:
            node: Extracted node.

        Returns:
            ShapeRecord with at most one fill and one stroke.
        """
        return ShapeRecord(
            type=map_node_type(node.type),
            position=Position(x=node.x, y=node.y),
            size=Size(width=node.width, height=node.height),
            rotation=node.rotation_degrees,
            fill=self._map_fill(node),
            stroke=self._map_stroke(node),
            text=node.text or None,
            properties=self._map_properties(node),
        )

    def _map_fill(self, node: Node) -> ShapeFill | None:
        if not node.fills:
            return None

        paint = node.fills[0]
        if isinstance(paint, SolidPaint):
            return ShapeFill(type="solid", color=paint.color, opacity=paint.opacity)
        if isinstance(paint, GradientPaint):
            return ShapeFill(
                type="gradient",
                gradient_stops=list(paint.gradient_stops),
                opacity=paint.opacity,
            )
        if isinstance(paint, ImagePaint):
            return ShapeFill(type="image", image_hash=paint.image_hash, opacity=paint.opacity)
        return None

    def _map_stroke(self, node: Node) -> ShapeStroke | None:
        if not node.strokes or not node.stroke_weight:
            return None

        paint = node.strokes[0]
        if isinstance(paint, SolidPaint):
            return ShapeStroke(color=paint.color, width=node.stroke_weight, opacity=paint.opacity)
        return None

    def _map_properties(self, node: Node) -> ShapeProperties | None:
        if node.corner_radius is None and not node.shape_type:
            return None
        return ShapeProperties(
            corner_radius=node.corner_radius,
            shape_type=node.shape_type or None,
        )
