"""Preview (Pillow) and print (reportlab) renderers plus the batch compositor"""

from event_canvas.renderer.assets import AssetLoader, encode_qr, load_image
from event_canvas.renderer.compositor import (
    BatchCompositor,
    PageGrid,
    Placement,
    batch_filename,
    compute_grid,
    single_filename,
)
from event_canvas.renderer.document_renderer import DocumentRenderer, wrap_text
from event_canvas.renderer.preview_renderer import PreviewFrame, PreviewRenderer

__all__ = [
    "AssetLoader",
    "encode_qr",
    "load_image",
    "BatchCompositor",
    "PageGrid",
    "Placement",
    "batch_filename",
    "compute_grid",
    "single_filename",
    "DocumentRenderer",
    "wrap_text",
    "PreviewFrame",
    "PreviewRenderer",
]
