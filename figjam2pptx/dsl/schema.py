"""Pydantic v2 models for the extracted FigJam node tree and export documents.

Nodes and paints are the intermediate representation shared by every
serializer. Coordinates are canvas pixels as reported by the host; colors
are already normalized to 0-255 integer channels.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pptx.dml.color import RGBColor
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


EXPORT_FORMAT_TAG = "figjam2pptx"
EXPORT_VERSION = "1.0.0"

# Keeps ints as ints so text output matches the host's numbers
Number = Union[int, float]


class NodeType(str, Enum):
    """Node variants understood by the extractor."""

    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    POLYGON = "POLYGON"
    SHAPE_WITH_TEXT = "SHAPE_WITH_TEXT"
    STICKY = "STICKY"
    TEXT = "TEXT"
    CONNECTOR = "CONNECTOR"
    GROUP = "GROUP"
    FRAME = "FRAME"
    OTHER = "OTHER"

    @classmethod
    def from_host(cls, tag: str) -> "NodeType":
        """Resolve a host type tag, falling back to OTHER."""
        try:
            member = cls(tag)
        except ValueError:
            return cls.OTHER
        return member

    @property
    def is_container(self) -> bool:
        return self in (NodeType.GROUP, NodeType.FRAME)


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Paint Models
# ============================================================================


class RGB(_Model):
    """Color with 0-255 integer channels."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @property
    def rgb_color(self) -> RGBColor:
        """python-pptx color value."""
        return RGBColor(self.r, self.g, self.b)


class RGBA(RGB):
    """Gradient stop color; alpha stays in 0-1."""

    a: float = Field(default=1.0, ge=0.0, le=1.0)


class SolidPaint(_Model):
    """Solid color paint."""

    type: Literal["solid"] = "solid"
    color: RGB
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)


class ImagePaint(_Model):
    """Image paint. Only the host's hash reference is kept, never the bytes."""

    type: Literal["image"] = "image"
    image_hash: Optional[str] = None
    scale_mode: Optional[str] = None
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)


class GradientStop(_Model):
    """A gradient color stop."""

    position: float
    color: RGBA


class GradientPaint(_Model):
    """Linear, radial, angular or diamond gradient."""

    type: Literal["gradient"] = "gradient"
    gradient_type: str = Field(description="Host gradient kind, e.g. 'GRADIENT_LINEAR'")
    gradient_stops: list[GradientStop] = Field(default_factory=list)
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)


class UnknownPaint(_Model):
    """Placeholder for a paint kind the normalizer does not recognize."""

    type: Literal["unknown"] = "unknown"
    host_type: Optional[str] = None


Paint = Annotated[
    Union[SolidPaint, ImagePaint, GradientPaint, UnknownPaint],
    Field(discriminator="type"),
]


# ============================================================================
# Node Models
# ============================================================================


class ConnectorEndpoint(_Model):
    """One end of a connector.

    ``endpoint_node_id`` refers to another node's id and is not checked.
    """

    x: Number = 0
    y: Number = 0
    endpoint_node_id: Optional[str] = None


class Node(_Model):
    """A single extracted canvas object."""

    id: str
    name: str = ""
    type: NodeType
    host_type: str = Field(default="", description="Original host type tag")

    # Geometry
    x: Number = 0
    y: Number = 0
    width: Number = Field(default=0, ge=0)
    height: Number = Field(default=0, ge=0)
    rotation_degrees: Number = 0
    visible: bool = True

    # Visual properties
    fills: Optional[list[Paint]] = None
    strokes: Optional[list[Paint]] = None
    stroke_weight: Optional[Number] = Field(default=None, ge=0)

    # Text and shape details
    text: Optional[str] = None
    corner_radius: Optional[Number] = Field(default=None, ge=0)
    shape_type: Optional[str] = None

    # Connectors
    connector_start: Optional[ConnectorEndpoint] = None
    connector_end: Optional[ConnectorEndpoint] = None

    # Groups and frames
    children: Optional[list["Node"]] = None

    @model_validator(mode="after")
    def _children_only_on_containers(self) -> "Node":
        if self.type.is_container and self.children is None:
            raise ValueError(f"{self.type.value} node requires a children list")
        if not self.type.is_container and self.children is not None:
            raise ValueError(f"{self.type.value} node cannot have children")
        return self

    def walk(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children or ():
            yield from child.walk()


class PageInfo(_Model):
    """Snapshot of the page the selection was taken from."""

    name: str = ""
    width: Number = 0
    height: Number = 0


class ExtractionPayload(_Model):
    """Message sent from the extraction side to the formatting side."""

    nodes: list[Node] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


# ============================================================================
# Export Document Models
# ============================================================================


class Position(_Model):
    x: Number = 0
    y: Number = 0


class Size(_Model):
    width: Number = 0
    height: Number = 0


class ShapeFill(_Model):
    """Single fill of an exported shape."""

    type: Literal["solid", "gradient", "image"]
    color: Optional[RGB] = None
    gradient_stops: Optional[list[GradientStop]] = None
    image_hash: Optional[str] = None
    opacity: float = 1.0


class ShapeStroke(_Model):
    """Single stroke of an exported shape."""

    color: RGB
    width: Number
    opacity: float = 1.0


class ShapeProperties(_Model):
    corner_radius: Optional[Number] = None
    shape_type: Optional[str] = None


class ShapeRecord(_Model):
    """Flattened, presentation-oriented view of a node."""

    type: str
    position: Position
    size: Size
    rotation: Number = 0
    fill: Optional[ShapeFill] = None
    stroke: Optional[ShapeStroke] = None
    text: Optional[str] = None
    properties: Optional[ShapeProperties] = None


class ExportDocument(_Model):
    """Top-level structure of the JSON export."""

    format: Literal["figjam2pptx"] = EXPORT_FORMAT_TAG
    version: str = EXPORT_VERSION
    export_date: str
    page: PageInfo
    shapes: list[ShapeRecord] = Field(default_factory=list)
