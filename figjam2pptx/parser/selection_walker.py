"""Walk the host selection and extract every selected node."""

import logging
from typing import Any, Iterable

from figjam2pptx.dsl.schema import Node, PageInfo
from figjam2pptx.errors import EmptySelectionError, InvalidHostNodeError
from figjam2pptx.parser.host import get_field, get_number
from figjam2pptx.parser.node_extractor import NodeExtractor

logger = logging.getLogger(__name__)


class SelectionWalker:
    """Extracts a host selection into an ordered list of nodes."""

    def __init__(self, extractor: NodeExtractor | None = None) -> None:
        """Initialize the walker.

        Args:
            extractor: Node extractor to use; a default one is created if omitted.
        """
        self.extractor = extractor or NodeExtractor()

    def walk(self, selection: Iterable[Any] | None, page: Any = None) -> tuple[list[Node], PageInfo]:
        """Extract every selected node, keeping selection order.

        Args:
            selection: Top-level selected host nodes.
            page: Host page the selection belongs to.

        Returns:
            Tuple of (extracted nodes, page snapshot).

        Raises:
            EmptySelectionError: If nothing is selected.
        """
        selected = list(selection or ())
        if not selected:
            raise EmptySelectionError()

        page_info = self.read_page_info(page)

        nodes: list[Node] = []
        for host_node in selected:
            try:
                nodes.append(self.extractor.extract(host_node))
            except InvalidHostNodeError as e:
                logger.warning(f"Skipping selected object: {e}")

        logger.debug(f"Extracted {len(nodes)} of {len(selected)} selected objects from page {page_info.name!r}")
        return nodes, page_info

    def read_page_info(self, page: Any) -> PageInfo:
        """Snapshot the page name and size."""
        name = get_field(page, "name")
        return PageInfo(
            name=name if isinstance(name, str) else "",
            width=max(0, get_number(page, "width")),
            height=max(0, get_number(page, "height")),
        )


def walk(selection: Iterable[Any] | None, page: Any = None) -> tuple[list[Node], PageInfo]:
    """Module-level shortcut for SelectionWalker().walk."""
    return SelectionWalker().walk(selection, page)
