"""Text and image viewer support."""

from .image import probe_image, render_half_blocks, supports_kitty_format
from .text import (
    TextDocument,
    ViewerState,
    clamp_scroll_line,
    load_text_document,
    regular_file_size,
    relative_line_label,
    viewport_top,
)

__all__ = [
    "TextDocument",
    "ViewerState",
    "clamp_scroll_line",
    "load_text_document",
    "probe_image",
    "regular_file_size",
    "relative_line_label",
    "render_half_blocks",
    "supports_kitty_format",
    "viewport_top",
]
