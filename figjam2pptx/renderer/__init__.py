"""Renderer module - serializes the extracted node tree.

Each serializer consumes the same Node/PageInfo model independently:
- JSON export document (shape records, first fill/stroke only)
- XML export document (full node tree, nested groups, CDATA text)
- PPTX preview (python-pptx shapes on a single slide)
"""

from figjam2pptx.renderer.json_writer import JSONSerializer, serialize_document
from figjam2pptx.renderer.pptx_writer import PPTXWriter
from figjam2pptx.renderer.shape_mapper import NODE_TYPE_MAP, ShapeMapper, map_node_type
from figjam2pptx.renderer.style_renderer import StyleRenderer
from figjam2pptx.renderer.xml_writer import XMLSerializer, serialize_xml

__all__ = [
    "JSONSerializer",
    "NODE_TYPE_MAP",
    "PPTXWriter",
    "ShapeMapper",
    "StyleRenderer",
    "XMLSerializer",
    "map_node_type",
    "serialize_document",
    "serialize_xml",
]
