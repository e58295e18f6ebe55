"""figjam2pptx - export FigJam selections for presentation tools.

Extraction turns host canvas nodes into an intermediate Node tree; the
renderers turn that tree into a JSON export document, an XML document, the
raw extraction payload, or a PPTX preview.
"""

from figjam2pptx.dsl.schema import ExportDocument, ExtractionPayload, Node, NodeType, PageInfo
from figjam2pptx.errors import (
    EmptySelectionError,
    ExportError,
    InvalidHostNodeError,
    SerializationError,
    UnsupportedFormatError,
)
from figjam2pptx.export import ExportFormat, ExportResult, ExportService, ExportSummary
from figjam2pptx.parser import MIXED, NodeExtractor, PaintNormalizer, SelectionWalker
from figjam2pptx.renderer import JSONSerializer, PPTXWriter, ShapeMapper, XMLSerializer

__version__ = "1.0.0"

__all__ = [
    "EmptySelectionError",
    "ExportDocument",
    "ExportError",
    "ExportFormat",
    "ExportResult",
    "ExportService",
    "ExportSummary",
    "ExtractionPayload",
    "InvalidHostNodeError",
    "JSONSerializer",
    "MIXED",
    "Node",
    "NodeExtractor",
    "NodeType",
    "PPTXWriter",
    "PageInfo",
    "PaintNormalizer",
    "SelectionWalker",
    "SerializationError",
    "ShapeMapper",
    "UnsupportedFormatError",
    "XMLSerializer",
]
