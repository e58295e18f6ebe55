"""Parser module - extracts FigJam selections into the intermediate node tree.

This module covers:
- Access to host objects (live plugin objects or decoded JSON dumps)
- Paint normalization (solid, image, gradient; mixed stacks become empty)
- Recursive node extraction for shapes, stickies, text, connectors,
  groups and frames
- Walking a selection together with its page metadata
"""

from figjam2pptx.parser.host import MIXED, is_mixed
from figjam2pptx.parser.node_extractor import NodeExtractor
from figjam2pptx.parser.paint_normalizer import PaintNormalizer, normalize_paints
from figjam2pptx.parser.selection_walker import SelectionWalker, walk

__all__ = [
    "MIXED",
    "NodeExtractor",
    "PaintNormalizer",
    "SelectionWalker",
    "is_mixed",
    "normalize_paints",
    "walk",
]
