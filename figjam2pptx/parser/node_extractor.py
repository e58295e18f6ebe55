"""Extract host canvas nodes into the intermediate Node model."""

import logging
from typing import Any

from figjam2pptx.config import MAX_DEPTH_LIMIT, get_settings
from figjam2pptx.dsl.schema import ConnectorEndpoint, Node, NodeType
from figjam2pptx.errors import InvalidHostNodeError
from figjam2pptx.parser.host import (
    as_number,
    get_field,
    get_number,
    get_sequence,
    has_field,
    is_mixed,
)
from figjam2pptx.parser.paint_normalizer import PaintNormalizer

logger = logging.getLogger(__name__)


class NodeExtractor:
    """Extracts FigJam nodes, recursing into groups and frames."""

    def __init__(self, max_depth: int | None = None) -> None:
        """Initialize the node extractor.

        Args:
            max_depth: Deepest container level whose children are extracted.
                Defaults to the configured ``max_depth``.

        Raises:
            ValueError: If ``max_depth`` is outside 1..MAX_DEPTH_LIMIT.
        """
        self.paint_normalizer = PaintNormalizer()
        self.max_depth = max_depth if max_depth is not None else get_settings().max_depth
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}")

    def extract(self, host_node: Any, depth: int = 0) -> Node:
        """Extract a single host node.

        Unsupported node types are not an error: they come back as a node
        with identity and geometry only.

        Args:
            host_node: Host node object or mapping.
            depth: Nesting level of ``host_node`` (0 for selected nodes).

        Returns:
            Extracted Node.

        Raises:
            InvalidHostNodeError: If ``host_node`` has no type tag.
        """
        host_type = get_field(host_node, "type")
        if not isinstance(host_type, str) or not host_type:
            raise InvalidHostNodeError(f"Host object has no node type: {host_node!r}")

        node_type = NodeType.from_host(host_type)
        node_dict = self._extract_base(host_node, node_type, host_type)

        if node_type in (NodeType.RECTANGLE, NodeType.ELLIPSE, NodeType.POLYGON):
            self._extract_geometric(host_node, node_type, node_dict)
        elif node_type == NodeType.SHAPE_WITH_TEXT:
            self._extract_shape_with_text(host_node, node_dict)
        elif node_type == NodeType.STICKY:
            self._extract_sticky(host_node, node_dict)
        elif node_type == NodeType.TEXT:
            self._extract_text(host_node, node_dict)
        elif node_type == NodeType.CONNECTOR:
            self._extract_connector(host_node, node_dict)
        elif node_type.is_container:
            self._extract_container(host_node, node_dict, depth)
        else:
            logger.info(f"Unsupported node type: {host_type}")

        return Node(**node_dict)

    def _extract_base(self, host_node: Any, node_type: NodeType, host_type: str) -> dict[str, Any]:
        """Identity, geometry and visibility shared by every node.

        Size and rotation are not present on every host node, so they
        default to 0.
        """
        node_id = get_field(host_node, "id")
        name = get_field(host_node, "name")
        visible = get_field(host_node, "visible", True)

        return {
            "id": str(node_id) if node_id is not None else "",
            "name": name if isinstance(name, str) else "",
            "type": node_type,
            "host_type": host_type,
            "x": get_number(host_node, "x"),
            "y": get_number(host_node, "y"),
            "width": max(0, get_number(host_node, "width")),
            "height": max(0, get_number(host_node, "height")),
            "rotation_degrees": get_number(host_node, "rotation"),
            "visible": visible is not False,
        }

    def _extract_geometric(
        self,
        host_node: Any,
        node_type: NodeType,
        node_dict: dict[str, Any],
    ) -> None:
        """Rectangle, ellipse and polygon properties."""
        node_dict["fills"] = self.paint_normalizer.normalize_paints(get_field(host_node, "fills"))
        node_dict["strokes"] = self.paint_normalizer.normalize_paints(get_field(host_node, "strokes"))
        node_dict["stroke_weight"] = self._stroke_weight(host_node)

        if node_type == NodeType.RECTANGLE:
            node_dict["corner_radius"] = self._corner_radius(host_node)
        elif node_type == NodeType.POLYGON:
            point_count = as_number(get_field(host_node, "pointCount"), None)
            if isinstance(point_count, float) and point_count.is_integer():
                point_count = int(point_count)
            if point_count is not None:
                node_dict["shape_type"] = f"polygon-{point_count}"

    def _extract_shape_with_text(self, host_node: Any, node_dict: dict[str, Any]) -> None:
        shape_type = get_field(host_node, "shapeType")
        if isinstance(shape_type, str):
            node_dict["shape_type"] = shape_type
        node_dict["fills"] = self.paint_normalizer.normalize_paints(get_field(host_node, "fills"))
        node_dict["strokes"] = self.paint_normalizer.normalize_paints(get_field(host_node, "strokes"))
        node_dict["text"] = self.extract_text_content(get_field(host_node, "text"))

    def _extract_sticky(self, host_node: Any, node_dict: dict[str, Any]) -> None:
        # Stickies have no stroke
        node_dict["fills"] = self.paint_normalizer.normalize_paints(get_field(host_node, "fills"))
        node_dict["text"] = self.extract_text_content(get_field(host_node, "text"))

    def _extract_text(self, host_node: Any, node_dict: dict[str, Any]) -> None:
        characters = get_field(host_node, "characters")
        node_dict["text"] = characters if isinstance(characters, str) else ""
        node_dict["fills"] = self.paint_normalizer.normalize_paints(get_field(host_node, "fills"))

    def _extract_connector(self, host_node: Any, node_dict: dict[str, Any]) -> None:
        node_dict["strokes"] = self.paint_normalizer.normalize_paints(get_field(host_node, "strokes"))
        node_dict["stroke_weight"] = self._stroke_weight(host_node)
        node_dict["connector_start"] = self._endpoint(get_field(host_node, "connectorStart"))
        node_dict["connector_end"] = self._endpoint(get_field(host_node, "connectorEnd"))

    def _extract_container(self, host_node: Any, node_dict: dict[str, Any], depth: int) -> None:
        """Extract children of a group or frame in host order.

        Children that are not nodes are skipped, so the result never has
        holes. Past ``max_depth`` the container keeps an empty child list.
        """
        children: list[Node] = []
        host_children = get_sequence(host_node, "children")

        if depth >= self.max_depth:
            if host_children:
                logger.warning(
                    f"Max nesting depth {self.max_depth} reached at node "
                    f"{node_dict['id']!r}; dropping {len(host_children)} children"
                )
            node_dict["children"] = children
            return

        for child in host_children:
            try:
                children.append(self.extract(child, depth + 1))
            except InvalidHostNodeError as e:
                logger.warning(f"Skipping child of {node_dict['id']!r}: {e}")

        node_dict["children"] = children

    def extract_text_content(self, text_node: Any) -> str:
        """Resolve the full character content of a text sub-node.

        Formatting runs are not kept, only the concatenated characters.
        """
        if text_node is None:
            return ""
        if isinstance(text_node, str):
            return text_node
        characters = get_field(text_node, "characters")
        return characters if isinstance(characters, str) else ""

    def _endpoint(self, endpoint: Any) -> ConnectorEndpoint:
        """Resolve a connector endpoint.

        Free-floating ends carry a position; attached ends carry the id of
        the node they are attached to and may have no position.
        """
        position = get_field(endpoint, "position")
        node_id = get_field(endpoint, "endpointNodeId")
        return ConnectorEndpoint(
            x=get_number(position, "x") if position is not None else 0,
            y=get_number(position, "y") if position is not None else 0,
            endpoint_node_id=node_id if isinstance(node_id, str) and node_id else None,
        )

    def _stroke_weight(self, host_node: Any) -> float | None:
        if not has_field(host_node, "strokeWeight"):
            return None
        weight = get_field(host_node, "strokeWeight")
        if is_mixed(weight):
            return None
        weight = as_number(weight, None)
        return max(0, weight) if weight is not None else None

    def _corner_radius(self, host_node: Any) -> float | None:
        radius = get_field(host_node, "cornerRadius")
        if is_mixed(radius):
            # Per-corner radii differ; no single value to report
            return None
        radius = as_number(radius, None)
        return max(0, radius) if radius is not None else None
