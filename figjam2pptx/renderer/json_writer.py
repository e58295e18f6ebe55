"""Render extracted nodes as the structured JSON export document."""

from datetime import datetime
from typing import Iterable

from figjam2pptx.config import get_settings
from figjam2pptx.dsl.schema import ExportDocument, Node, PageInfo
from figjam2pptx.renderer.formatting import format_timestamp
from figjam2pptx.renderer.shape_mapper import ShapeMapper


class JSONSerializer:
    """Builds and serializes ExportDocuments.

    Stateless apart from its options; each call creates a new document.
    """

    def __init__(self, indent: int | None = None) -> None:
        """Initialize the serializer.

        Args:
            indent: JSON indentation; defaults to the configured value.
        """
        self.indent = indent if indent is not None else get_settings().json_indent
        self.shape_mapper = ShapeMapper()

    def build_document(
        self,
        nodes: Iterable[Node],
        page_info: PageInfo,
        now: datetime | None = None,
    ) -> ExportDocument:
        """Build the export document, one shape record per node in order."""
        return ExportDocument(
            export_date=format_timestamp(now),
            page=page_info,
            shapes=[self.shape_mapper.to_shape_record(node) for node in nodes],
        )

    def serialize(
        self,
        nodes: Iterable[Node],
        page_info: PageInfo,
        now: datetime | None = None,
    ) -> str:
        """Serialize nodes to indented JSON text.

        Args:
            nodes: Extracted top-level nodes.
            page_info: Page snapshot.
            now: Export timestamp; the current time if omitted.

        Returns:
            JSON document text.
        """
        document = self.build_document(nodes, page_info, now)
        return document.model_dump_json(indent=self.indent, by_alias=True, exclude_none=True)


def serialize_document(
    nodes: Iterable[Node],
    page_info: PageInfo,
    now: datetime | None = None,
) -> str:
    """Module-level shortcut for JSONSerializer().serialize."""
    return JSONSerializer().serialize(nodes, page_info, now)
