"""User interface components."""

from mediacatalog.ui.console import ConsoleUI
from mediacatalog.ui.display import (
    format_timestamp,
    build_video_table,
    build_category_table,
    build_playlist_table,
    show_video,
)

__all__ = [
    "ConsoleUI",
    "format_timestamp",
    "build_video_table",
    "build_category_table",
    "build_playlist_table",
    "show_video",
]
