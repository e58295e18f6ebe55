"""Export orchestration: selection -> nodes -> chosen output format."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from pydantic_core import PydanticSerializationError

from figjam2pptx.dsl.schema import ExtractionPayload, Node, PageInfo
from figjam2pptx.errors import SerializationError, UnsupportedFormatError
from figjam2pptx.parser.node_extractor import NodeExtractor
from figjam2pptx.parser.selection_walker import SelectionWalker
from figjam2pptx.renderer.json_writer import JSONSerializer
from figjam2pptx.renderer.pptx_writer import PPTXWriter
from figjam2pptx.renderer.xml_writer import XMLSerializer

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    """Output formats."""

    JSON = "json"
    XML = "xml"
    NODES = "nodes"  # raw extraction payload
    PPTX = "pptx"

    @classmethod
    def parse(cls, value: "str | ExportFormat") -> "ExportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedFormatError(str(value)) from None

    @property
    def is_binary(self) -> bool:
        return self == ExportFormat.PPTX


@dataclass
class ExportSummary:
    """What an export contained, for status reporting."""

    object_count: int
    page_name: str
    type_counts: dict[str, int] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return f"Successfully exported {self.object_count} object(s)"

    @property
    def types_description(self) -> str:
        return ", ".join(f"{name}: {count}" for name, count in self.type_counts.items())

    @classmethod
    def from_nodes(cls, nodes: list[Node], page_info: PageInfo) -> "ExportSummary":
        """Count top-level nodes per host type, in first-seen order."""
        counts: dict[str, int] = {}
        for node in nodes:
            key = node.host_type or node.type.value
            counts[key] = counts.get(key, 0) + 1
        return cls(object_count=len(nodes), page_name=page_info.name, type_counts=counts)


@dataclass
class ExportResult:
    """Rendered output plus its summary."""

    format: ExportFormat
    content: str | bytes
    summary: ExportSummary
    nodes: list[Node] = field(default_factory=list, repr=False)


class ExportService:
    """Runs the selection walker and one serializer.

    Serializer failures are raised as SerializationError; no partial
    output is ever returned.
    """

    def __init__(
        self,
        walker: SelectionWalker | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.walker = walker or SelectionWalker(NodeExtractor(max_depth=max_depth))
        self.json_serializer = JSONSerializer()
        self.xml_serializer = XMLSerializer()
        self.pptx_writer = PPTXWriter()

    def export(
        self,
        selection: Iterable[Any] | None,
        page: Any = None,
        fmt: "str | ExportFormat" = ExportFormat.JSON,
        now: datetime | None = None,
    ) -> ExportResult:
        """Extract a host selection and render it.

        Args:
            selection: Top-level selected host nodes.
            page: Host page of the selection.
            fmt: Output format.
            now: Export timestamp for the text formats.

        Returns:
            ExportResult with the rendered content.

        Raises:
            EmptySelectionError: If nothing is selected.
            UnsupportedFormatError: If ``fmt`` is unknown.
            SerializationError: If rendering fails.
        """
        export_format = ExportFormat.parse(fmt)
        nodes, page_info = self.walker.walk(selection, page)
        return self.render(nodes, page_info, export_format, now)

    def render(
        self,
        nodes: list[Node],
        page_info: PageInfo,
        fmt: "str | ExportFormat" = ExportFormat.JSON,
        now: datetime | None = None,
    ) -> ExportResult:
        """Render already extracted nodes.

        Raises:
            UnsupportedFormatError: If ``fmt`` is unknown.
            SerializationError: If rendering fails.
        """
        export_format = ExportFormat.parse(fmt)
        nodes = list(nodes)

        try:
            content = self._serialize(export_format, nodes, page_info, now)
        except (ValueError, TypeError, AttributeError, KeyError, PydanticSerializationError) as e:
            logger.error(f"{export_format.value} serialization failed: {e}")
            raise SerializationError(export_format.value, e) from e

        summary = ExportSummary.from_nodes(nodes, page_info)
        logger.info(f"{summary.message} as {export_format.value} from page {page_info.name!r}")
        return ExportResult(format=export_format, content=content, summary=summary, nodes=nodes)

    def _serialize(
        self,
        export_format: ExportFormat,
        nodes: list[Node],
        page_info: PageInfo,
        now: datetime | None,
    ) -> str | bytes:
        if export_format == ExportFormat.JSON:
            return self.json_serializer.serialize(nodes, page_info, now)
        if export_format == ExportFormat.XML:
            return self.xml_serializer.serialize(nodes, page_info, now)
        if export_format == ExportFormat.NODES:
            return dump_payload(nodes, page_info, self.json_serializer.indent)
        return self.pptx_writer.write(nodes, page_info)


def dump_payload(nodes: list[Node], page_info: PageInfo, indent: int | None = 2) -> str:
    """Serialize the extraction payload passed from the plugin to the UI."""
    payload = ExtractionPayload(nodes=nodes, page_info=page_info)
    return payload.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def load_payload(text: str | bytes) -> ExtractionPayload:
    """Parse and validate an extraction payload.

    The text is decoded with the json module before validation; the
    pydantic JSON parser stops at a nesting depth that deep node trees reach.
    """
    return ExtractionPayload.model_validate(json.loads(text))
