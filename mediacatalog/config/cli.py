"""Command-line interface argument parsing."""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from mediacatalog.catalog.query import SortOption


@dataclass
class CLIArgs:
    """
    Parsed command-line arguments.

    Attributes:
        db_path: Database file, or None to use the environment/default.
        debug: If True, enable debug logging.
        seed: If False, never import the sample catalog.
        command: Collection addressed (videos, categories, playlists).
        action: Operation on that collection.
        options: Remaining action-specific arguments.
    """

    db_path: Optional[Path] = None
    debug: bool = False
    seed: bool = True
    command: str = ""
    action: str = ""
    options: Dict[str, Any] = field(default_factory=dict)


def _add_video_commands(subparsers) -> None:
    videos = subparsers.add_parser('videos', help='manage bookmarked videos')
    actions = videos.add_subparsers(dest='action', required=True)

    list_parser = actions.add_parser('list', help='list videos')
    list_parser.add_argument('-s', '--search', default='', help='title substring')
    list_parser.add_argument('-c', '--category', default=None, help="category id, 'all' or 'photos'")
    list_parser.add_argument(
        '--sort',
        choices=[option.value for option in SortOption],
        default=SortOption.NEWEST.value,
        help='sort order (default: newest)'
    )
    list_parser.add_argument('-f', '--favorites', action='store_true', help='only favorites')

    add_parser = actions.add_parser('add', help='bookmark a video')
    add_parser.add_argument('title')
    add_parser.add_argument('url')
    add_parser.add_argument('-c', '--category', default=None, help='category id')
    add_parser.add_argument('-d', '--description', default=None)
    add_parser.add_argument('-t', '--thumbnail', default=None)
    add_parser.add_argument('--photos', action='store_true', help='link is a photo collection')

    for name, help_text in (
        ('show', 'show a video and its comments'),
        ('delete', 'delete a video (also from playlists)'),
        ('favorite', 'toggle the favorite flag'),
        ('watch', 'mark a video as watched now'),
    ):
        parser = actions.add_parser(name, help=help_text)
        parser.add_argument('video_id')

    comment_parser = actions.add_parser('comment', help='add a comment')
    comment_parser.add_argument('video_id')
    comment_parser.add_argument('text')
    comment_parser.add_argument('-u', '--user', default=None, help='comment author')

    move_parser = actions.add_parser('move', help='change the category of a video')
    move_parser.add_argument('video_id')
    move_parser.add_argument('category_id')

    edit_parser = actions.add_parser('edit', help='change title, link, description or thumbnail')
    edit_parser.add_argument('video_id')
    edit_parser.add_argument('--title', default=None)
    edit_parser.add_argument('--url', default=None)
    edit_parser.add_argument('-d', '--description', default=None, help="new description ('' clears it)")
    edit_parser.add_argument('-t', '--thumbnail', default=None, help="new thumbnail URL ('' clears it)")


def _add_category_commands(subparsers) -> None:
    categories = subparsers.add_parser('categories', help='manage categories')
    actions = categories.add_subparsers(dest='action', required=True)

    actions.add_parser('list', help='list categories in display order')

    add_parser = actions.add_parser('add', help='create a category')
    add_parser.add_argument('name')

    rename_parser = actions.add_parser('rename', help='rename a category')
    rename_parser.add_argument('category_id')
    rename_parser.add_argument('name')

    delete_parser = actions.add_parser('delete', help='delete a category and move its videos')
    delete_parser.add_argument('category_id')
    delete_parser.add_argument('--to', dest='target', default=None,
                               help='category receiving the videos (default: fallback)')

    reorder_parser = actions.add_parser('reorder', help='set display order')
    reorder_parser.add_argument('category_ids', nargs='+')


def _add_playlist_commands(subparsers) -> None:
    playlists = subparsers.add_parser('playlists', help='manage playlists')
    actions = playlists.add_subparsers(dest='action', required=True)

    actions.add_parser('list', help='list playlists')

    create_cmd = actions.add_parser('create', help='create a playlist')
    create_cmd.add_argument('name')
    create_cmd.add_argument('-d', '--description', default=None)

    for name, help_text in (
        ('show', 'list the videos of a playlist'),
        ('delete', 'delete a playlist'),
    ):
        parser = actions.add_parser(name, help=help_text)
        parser.add_argument('playlist_id')

    for name, help_text in (
        ('add', 'add a video to a playlist'),
        ('remove', 'remove a video from a playlist'),
    ):
        parser = actions.add_parser(name, help=help_text)
        parser.add_argument('playlist_id')
        parser.add_argument('video_id')


def _add_library_commands(subparsers) -> None:
    library = subparsers.add_parser('library', help='export, import or clear the video library')
    actions = library.add_subparsers(dest='action', required=True)

    export_parser = actions.add_parser('export', help='write every video as JSON')
    export_parser.add_argument('-o', '--output', default=None, help='output file (default: stdout)')

    import_parser = actions.add_parser('import', help='replace the library with an export file')
    import_parser.add_argument('file')

    clear_parser = actions.add_parser('clear', help='remove every video')
    clear_parser.add_argument('-y', '--yes', action='store_true', help='do not ask for confirmation')


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='mediacatalog',
        description="""
        Personal catalog of bookmarked videos and photo collections,
        organized in categories and playlists.
        """
    )

    parser.add_argument(
        '--db',
        default=None,
        help="catalog database file (default: $MEDIACATALOG_DB or ./mediacatalog.db)"
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="enable debug logging"
    )

    parser.add_argument(
        '--no-seed',
        action='store_true',
        help="do not import sample videos into an empty catalog"
    )

    subparsers = parser.add_subparsers(dest='command', required=True)
    _add_video_commands(subparsers)
    _add_category_commands(subparsers)
    _add_playlist_commands(subparsers)
    _add_library_commands(subparsers)

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    parser = create_parser()
    return parser.parse_args(args)


def args_to_cli_args(namespace: argparse.Namespace) -> CLIArgs:
    """
    Convert argparse Namespace to CLIArgs dataclass.

    Args:
        namespace: Parsed argparse Namespace.

    Returns:
        CLIArgs instance.
    """
    global_keys = {'db', 'debug', 'no_seed', 'command', 'action'}
    options = {key: value for key, value in vars(namespace).items() if key not in global_keys}

    return CLIArgs(
        db_path=Path(namespace.db) if namespace.db else None,
        debug=namespace.debug,
        seed=not namespace.no_seed,
        command=namespace.command,
        action=namespace.action,
        options=options,
    )
