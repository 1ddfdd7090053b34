"""Tests for catalog display helpers."""

import io
from datetime import datetime

from rich.console import Console

from mediacatalog.models import CategorySettings, Comment, Playlist, Video
from mediacatalog.ui.console import ConsoleUI
from mediacatalog.ui.display import (
    build_category_table,
    build_playlist_table,
    build_video_table,
    format_timestamp,
    show_video,
)


def _recording_ui():
    return ConsoleUI(Console(file=io.StringIO(), width=200, color_system=None))


def _output(ui):
    return ui.console.file.getvalue()


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_unset(self):
        """Missing timestamps show a dash."""
        assert format_timestamp(None) == "-"
        assert format_timestamp(0) == "-"

    def test_milliseconds(self):
        """Timestamps are read as milliseconds."""
        expected = datetime.fromtimestamp(1_700_000_000).strftime("%Y-%m-%d %H:%M")
        assert format_timestamp(1_700_000_000_000) == expected


class TestTables:
    """Tests for the table builders."""

    def test_video_table_uses_category_names(self):
        """The category column shows the display name."""
        ui = _recording_ui()
        videos = [Video(id="v1", title="Syllogism", category="reasoning", favorite=True)]
        categories = [CategorySettings(id="reasoning", name="Logical Reasoning", order=0)]
        table = build_video_table(ui, videos, categories)
        assert table.row_count == 1
        ui.print_table(table)
        assert "Logical Reasoning" in _output(ui)

    def test_video_table_escapes_markup(self):
        """Titles containing rich markup are printed literally."""
        ui = _recording_ui()
        ui.print_table(build_video_table(ui, [Video(id="v1", title="[bold]x[/bold]")], []))
        assert "[bold]x[/bold]" in _output(ui)

    def test_category_table_sorted(self):
        """Categories are listed by order with counts."""
        ui = _recording_ui()
        categories = [
            CategorySettings(id="b", name="Second", order=1),
            CategorySettings(id="a", name="First", order=0),
        ]
        ui.print_table(build_category_table(ui, categories, {"a": 2}))
        output = _output(ui)
        assert output.index("First") < output.index("Second")

    def test_playlist_table(self):
        """Playlists show their video count."""
        ui = _recording_ui()
        table = build_playlist_table(ui, [Playlist(id="p1", name="Mix", video_ids=["a", "b"])])
        assert table.row_count == 1


class TestShowVideo:
    """Tests for show_video."""

    def test_with_comments(self):
        """Comments are listed under the video."""
        ui = _recording_ui()
        video = Video(id="v1", title="T", url="https://youtu.be/x",
                      comments=[Comment(id="c", text="Great video", username="ana")])
        show_video(ui, video, "Aptitude")
        output = _output(ui)
        assert "Great video" in output
        assert "Aptitude" in output

    def test_without_comments(self):
        """A video without comments says so."""
        ui = _recording_ui()
        show_video(ui, Video(id="v1", title="T"), "Aptitude")
        assert "No comments yet" in _output(ui)
