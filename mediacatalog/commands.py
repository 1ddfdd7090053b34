"""Command handlers behind the CLI.

Each handler receives the open store, the action options and the console,
and returns a process exit code.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Tuple

from loguru import logger
from rich.prompt import Confirm

from mediacatalog.catalog.playlists import MembershipChange
from mediacatalog.catalog.query import SortOption, search_videos
from mediacatalog.catalog.store import CatalogStore
from mediacatalog.config.cli import CLIArgs
from mediacatalog.config.settings import DEFAULT_USERNAME, VIDEO_TYPE_PHOTOS, VIDEO_TYPE_YOUTUBE
from mediacatalog.models.video import Comment, Video
from mediacatalog.storage.exceptions import CatalogValidationError, InvalidFormatError
from mediacatalog.ui.console import ConsoleUI
from mediacatalog.ui.display import (
    build_category_table,
    build_playlist_table,
    build_video_table,
    show_video,
)

EXIT_OK = 0
EXIT_FAILURE = 1

Handler = Callable[[CatalogStore, Dict[str, Any], ConsoleUI], int]


def _not_found(ui: ConsoleUI, kind: str, item_id: str) -> int:
    ui.print_error(f"{kind} '{item_id}' not found")
    return EXIT_FAILURE


# Videos

def list_videos(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    videos = store.videos.favorites() if opts.get("favorites") else store.videos.get_all()
    selected = search_videos(
        videos,
        term=opts.get("search", ""),
        category=opts.get("category"),
        sort=SortOption(opts.get("sort", SortOption.NEWEST.value)),
    )
    if not selected:
        ui.print_info("No videos found")
        return EXIT_OK
    ui.print_table(build_video_table(ui, selected, store.categories.get_all()))
    return EXIT_OK


def add_video(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    category = opts.get("category") or store.fallback_category
    if category not in store.categories.ids():
        ui.print_error(f"Category '{category}' does not exist")
        return EXIT_FAILURE

    video = store.videos.add(Video(
        title=opts["title"].strip(),
        url=opts["url"].strip(),
        category=category,
        description=opts.get("description"),
        thumbnail=opts.get("thumbnail"),
        video_type=VIDEO_TYPE_PHOTOS if opts.get("photos") else VIDEO_TYPE_YOUTUBE,
    ))
    ui.print_success(f"Added '{video.title}' as {video.id}")
    return EXIT_OK


def show_video_details(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    video = store.videos.get_by_id(opts["video_id"])
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])
    category = store.categories.get_by_id(video.category)
    show_video(ui, video, category.name if category else video.category)
    return EXIT_OK


def delete_video(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if not store.videos.delete(opts["video_id"]):
        return _not_found(ui, "Video", opts["video_id"])
    ui.print_success(f"Deleted video {opts['video_id']}")
    return EXIT_OK


def toggle_favorite(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    video = store.videos.toggle_favorite(opts["video_id"])
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])
    state = "added to" if video.favorite else "removed from"
    ui.print_success(f"'{video.title}' {state} favorites")
    return EXIT_OK


def mark_watched(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    video = store.videos.mark_watched(opts["video_id"])
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])
    ui.print_success(f"Marked '{video.title}' as watched")
    return EXIT_OK


def add_comment(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    text = opts["text"].strip()
    if not text:
        ui.print_error("Please enter a comment")
        return EXIT_FAILURE
    comment = Comment(text=text, username=opts.get("user") or DEFAULT_USERNAME)
    video = store.videos.add_comment(opts["video_id"], comment)
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])
    ui.print_success(f"Comment added ({len(video.comments)} total)")
    return EXIT_OK


def move_video(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if opts["category_id"] not in store.categories.ids():
        ui.print_error(f"Category '{opts['category_id']}' does not exist")
        return EXIT_FAILURE
    video = store.videos.get_by_id(opts["video_id"])
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])
    video.category = opts["category_id"]
    store.videos.update(video)
    ui.print_success(f"Moved '{video.title}' to {video.category}")
    return EXIT_OK


def edit_video(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    video = store.videos.get_by_id(opts["video_id"])
    if video is None:
        return _not_found(ui, "Video", opts["video_id"])

    changed = []
    for field_name in ("title", "url"):
        value = opts.get(field_name)
        if value is None:
            continue
        if not value.strip():
            ui.print_error(f"The {field_name} cannot be empty")
            return EXIT_FAILURE
        setattr(video, field_name, value.strip())
        changed.append(field_name)
    for field_name in ("description", "thumbnail"):
        value = opts.get(field_name)
        if value is not None:
            setattr(video, field_name, value.strip() or None)
            changed.append(field_name)

    if not changed:
        ui.print_warning("Nothing to change")
        return EXIT_OK
    store.videos.update(video)
    ui.print_success(f"Updated {', '.join(changed)} of '{video.title}'")
    return EXIT_OK


# Categories

def list_categories(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    counts: Dict[str, int] = {}
    for video in store.videos.get_all():
        counts[video.category] = counts.get(video.category, 0) + 1
    ui.print_table(build_category_table(ui, store.categories.get_all(), counts))
    return EXIT_OK


def add_category(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    store.create_category(opts["name"])
    ui.print_success(f"{opts['name'].strip()} has been added as a new category")
    return EXIT_OK


def rename_category(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if store.categories.get_by_id(opts["category_id"]) is None:
        return _not_found(ui, "Category", opts["category_id"])
    store.rename_category(opts["category_id"], opts["name"])
    ui.print_success(f"Category has been renamed to {opts['name'].strip()}")
    return EXIT_OK


def delete_category(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if store.categories.get_by_id(opts["category_id"]) is None:
        return _not_found(ui, "Category", opts["category_id"])
    store.remove_category(opts["category_id"], reassign_to=opts.get("target"))
    ui.print_success(f"Deleted category {opts['category_id']}")
    return EXIT_OK


def reorder_categories(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    known = store.categories.ids()
    unknown = [c for c in opts["category_ids"] if c not in known]
    if unknown:
        ui.print_warning(f"Ignoring unknown categories: {', '.join(unknown)}")
    store.categories.reorder(opts["category_ids"])
    return list_categories(store, opts, ui)


# Playlists

def list_playlists(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    playlists = store.playlists.get_all()
    if not playlists:
        ui.print_info("No playlists yet")
        return EXIT_OK
    ui.print_table(build_playlist_table(ui, playlists))
    return EXIT_OK


def create_playlist(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    name = opts["name"].strip()
    if not name:
        ui.print_error("Playlist name cannot be empty")
        return EXIT_FAILURE
    playlist = store.playlists.create(name, opts.get("description"))
    ui.print_success(f'"{playlist.name}" playlist has been created ({playlist.id})')
    return EXIT_OK


def show_playlist(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    playlist = store.playlists.get_by_id(opts["playlist_id"])
    if playlist is None:
        return _not_found(ui, "Playlist", opts["playlist_id"])
    videos = store.playlists.get_videos_in_playlist(playlist.id)
    if playlist.description:
        ui.print_info(playlist.description)
    if not videos:
        ui.print_info("This playlist is empty")
        return EXIT_OK
    ui.print_table(build_video_table(ui, videos, store.categories.get_all(), title=playlist.name))
    return EXIT_OK


def add_to_playlist(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    result = store.playlists.add_video(opts["playlist_id"], opts["video_id"])
    if result is MembershipChange.NOT_FOUND:
        ui.print_error("Playlist or video not found")
        return EXIT_FAILURE
    if result is MembershipChange.ALREADY_PRESENT:
        ui.print_warning("Video is already in this playlist")
        return EXIT_OK
    ui.print_success("Video added to playlist")
    return EXIT_OK


def remove_from_playlist(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    result = store.playlists.remove_video(opts["playlist_id"], opts["video_id"])
    if result is MembershipChange.NOT_FOUND:
        return _not_found(ui, "Playlist", opts["playlist_id"])
    if result is MembershipChange.NOT_PRESENT:
        ui.print_warning("Video is not in this playlist")
        return EXIT_OK
    ui.print_success("Video removed from playlist")
    return EXIT_OK


def delete_playlist(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if not store.playlists.delete(opts["playlist_id"]):
        return _not_found(ui, "Playlist", opts["playlist_id"])
    ui.print_success("The playlist has been deleted")
    return EXIT_OK


# Library

def export_library(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    text = store.export_videos()
    output = opts.get("output")
    if not output:
        ui.print(text, markup=False, highlight=False, soft_wrap=True)
        return EXIT_OK
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as e:
        ui.print_error(f"Could not write {output}: {e}")
        return EXIT_FAILURE
    ui.print_success(f"Exported {len(store.videos.get_all())} video(s) to {output}")
    return EXIT_OK


def import_library(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    try:
        text = Path(opts["file"]).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        ui.print_error(f"Could not read {opts['file']}: {e}")
        return EXIT_FAILURE
    try:
        videos = store.import_videos(text)
    except InvalidFormatError as e:
        ui.print_error(f"Invalid file format: {e}")
        return EXIT_FAILURE
    ui.print_success(f"{len(videos)} videos have been imported")
    return EXIT_OK


def clear_library(store: CatalogStore, opts: Dict[str, Any], ui: ConsoleUI) -> int:
    if not opts.get("yes") and not Confirm.ask(
        "Remove every video from the library?", console=ui.console, default=False
    ):
        ui.print_info("Nothing was removed")
        return EXIT_OK
    count = store.clear_videos()
    ui.print_success(f"Library cleared ({count} video(s) removed)")
    return EXIT_OK


HANDLERS: Dict[Tuple[str, str], Handler] = {
    ("videos", "list"): list_videos,
    ("videos", "add"): add_video,
    ("videos", "show"): show_video_details,
    ("videos", "delete"): delete_video,
    ("videos", "favorite"): toggle_favorite,
    ("videos", "watch"): mark_watched,
    ("videos", "comment"): add_comment,
    ("videos", "move"): move_video,
    ("videos", "edit"): edit_video,
    ("categories", "list"): list_categories,
    ("categories", "add"): add_category,
    ("categories", "rename"): rename_category,
    ("categories", "delete"): delete_category,
    ("categories", "reorder"): reorder_categories,
    ("playlists", "list"): list_playlists,
    ("playlists", "create"): create_playlist,
    ("playlists", "show"): show_playlist,
    ("playlists", "add"): add_to_playlist,
    ("playlists", "remove"): remove_from_playlist,
    ("playlists", "delete"): delete_playlist,
    ("library", "export"): export_library,
    ("library", "import"): import_library,
    ("library", "clear"): clear_library,
}


def run_command(store: CatalogStore, cli_args: CLIArgs, ui: ConsoleUI) -> int:
    """
    Dispatch a parsed command to its handler.

    Validation errors are reported on the console and turned into a
    non-zero exit code; persistence errors propagate to the caller.

    Returns:
        Exit code.
    """
    handler = HANDLERS.get((cli_args.command, cli_args.action))
    if handler is None:
        ui.print_error(f"Unknown command: {cli_args.command} {cli_args.action}")
        return EXIT_FAILURE

    logger.debug(f"Running {cli_args.command} {cli_args.action} with {cli_args.options}")
    try:
        return handler(store, cli_args.options, ui)
    except CatalogValidationError as e:
        ui.print_error(str(e))
        return EXIT_FAILURE
