"""Display functions for catalog contents."""

from datetime import datetime
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from mediacatalog.models.category import CategorySettings
from mediacatalog.models.playlist import Playlist
from mediacatalog.models.video import Video
from mediacatalog.ui.console import ConsoleUI


def format_timestamp(timestamp: Optional[int]) -> str:
    """
    Format a millisecond timestamp for display.

    Args:
        timestamp: Milliseconds since the epoch, or None.

    Returns:
        "YYYY-MM-DD HH:MM" in local time, or "-" when unset.
    """
    if not timestamp:
        return "-"
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d %H:%M")


def build_video_table(
    ui: ConsoleUI,
    videos: List[Video],
    categories: List[CategorySettings],
    title: str = "Videos",
) -> Table:
    """Build a table listing videos with their category name."""
    names: Dict[str, str] = {c.id: c.name for c in categories}
    table = ui.create_table(title, ["ID", "★", "Title", "Category", "Type", "Added", "Last watched"])
    for video in videos:
        table.add_row(
            escape(video.id),
            "★" if video.favorite else "",
            escape(video.title),
            escape(names.get(video.category, video.category)),
            video.video_type,
            format_timestamp(video.created_at),
            format_timestamp(video.last_watched),
        )
    return table


def build_category_table(ui: ConsoleUI, categories: List[CategorySettings], counts: Dict[str, int]) -> Table:
    """Build a table listing categories in display order with video counts."""
    table = ui.create_table("Categories", ["#", "ID", "Name", "Videos"])
    for category in sorted(categories, key=lambda c: c.order):
        table.add_row(
            str(category.order),
            escape(category.id),
            escape(category.name),
            str(counts.get(category.id, 0)),
        )
    return table


def build_playlist_table(ui: ConsoleUI, playlists: List[Playlist]) -> Table:
    """Build a table listing playlists."""
    table = ui.create_table("Playlists", ["ID", "Name", "Videos", "Created", "Description"])
    for playlist in playlists:
        table.add_row(
            escape(playlist.id),
            escape(playlist.name),
            str(len(playlist.video_ids)),
            format_timestamp(playlist.created_at),
            escape(playlist.description or ""),
        )
    return table


def show_video(ui: ConsoleUI, video: Video, category_name: str) -> None:
    """Print one video with its comments."""
    lines = [
        f"[bold]{escape(video.title)}[/bold]",
        f"URL: [cyan]{escape(video.url)}[/cyan]",
        f"Category: {escape(category_name)}",
        f"Type: {video.video_type}",
        f"Favorite: {'yes' if video.favorite else 'no'}",
        f"Added: {format_timestamp(video.created_at)}",
        f"Last watched: {format_timestamp(video.last_watched)}",
    ]
    if video.description:
        lines.append(f"\n{escape(video.description)}")
    ui.print_panel("\n".join(lines), title=escape(video.id))

    if video.comments:
        table = ui.create_table(f"Comments ({len(video.comments)})", ["User", "Date", "Text"])
        for comment in video.comments:
            table.add_row(
                escape(comment.username),
                format_timestamp(comment.created_at),
                escape(comment.text),
            )
        ui.print_table(table)
    else:
        ui.print_info("No comments yet")
