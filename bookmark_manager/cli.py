"""
Command-line interface for the Bookmark Manager.

Each subcommand loads the store, calls one core operation and prints the
result. The list is persisted by the core after every mutation.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from bookmark_manager import __version__
from bookmark_manager.config.configuration import Configuration
from bookmark_manager.config.pydantic_config import ConfigurationManager
from bookmark_manager.core.bookmark_store import BookmarkStore
from bookmark_manager.core.data_models import Bookmark, parse_category_input
from bookmark_manager.core.escaping import escape_html
from bookmark_manager.core.exporters import EXPORTERS
from bookmark_manager.core.filters import filter_bookmarks
from bookmark_manager.core.index import category_counts
from bookmark_manager.utils.error_handler import BookmarkManagerError, ImportFormatError
from bookmark_manager.utils.logging_setup import setup_logging
from bookmark_manager.utils.validation import (
    validate_config_file,
    validate_input_file,
    validate_output_file,
)

EDITABLE_FIELDS = ("title", "url", "desc", "categories", "icon")


class CLIInterface:
    """Command line interface over the bookmark store."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with one subparser per operation."""
        parser = argparse.ArgumentParser(
            prog="bookmark-manager",
            description="Personal bookmark manager - list, edit, import and export bookmarks",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-manager list --category 开发 --search docs
  bookmark-manager add --title "Python" --url https://www.python.org --categories "开发, 文档"
  bookmark-manager update 018f2c3a9b1e4d5c6f7a --desc "Official site"
  bookmark-manager remove 018f2c3a9b1e4d5c6f7a
  bookmark-manager export opml -o bookmarks.opml
  bookmark-manager import bookmarks.json

Configuration:
  Settings are read from --config, ./bookmark_manager.toml,
  ./bookmark_manager.json or ~/.bookmark_manager/config.toml.
  BOOKMARK_MANAGER_DATA_DIR overrides the storage directory.
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Configuration file path (TOML or JSON format)",
        )
        parser.add_argument(
            "--data-dir",
            help="Directory holding the bookmark store (overrides configuration)",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable debug logging",
        )

        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
        subparsers.required = True

        list_parser = subparsers.add_parser("list", help="List bookmarks")
        list_parser.add_argument("--category", default="", help="Only this category")
        list_parser.add_argument("--search", "-s", default="", help="Case-insensitive text search")
        list_parser.add_argument(
            "--html", action="store_true", help="Render the list as an HTML card fragment"
        )

        subparsers.add_parser("categories", help="List categories with counts")

        add_parser = subparsers.add_parser("add", help="Add a bookmark")
        add_parser.add_argument("--title", "-t", required=True)
        add_parser.add_argument("--url", "-u", required=True)
        self._add_optional_fields(add_parser)

        update_parser = subparsers.add_parser("update", help="Update a bookmark")
        update_parser.add_argument("id", help="Bookmark id")
        update_parser.add_argument("--title", "-t")
        update_parser.add_argument("--url", "-u")
        self._add_optional_fields(update_parser)

        remove_parser = subparsers.add_parser("remove", help="Remove a bookmark")
        remove_parser.add_argument("id", help="Bookmark id")

        export_parser = subparsers.add_parser("export", help="Export bookmarks")
        export_parser.add_argument("format", choices=sorted(EXPORTERS))
        export_parser.add_argument(
            "--output", "-o", help="Output file (default: write to stdout)"
        )

        import_parser = subparsers.add_parser("import", help="Import a JSON bookmark file")
        import_parser.add_argument("file", help="JSON file to import")

        config_parser = subparsers.add_parser(
            "create-config", help="Write a sample configuration file"
        )
        config_parser.add_argument("--format", choices=["toml", "json"], default="toml")
        config_parser.add_argument("--output", "-o", help="Output path")

        return parser

    def _add_optional_fields(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--desc", "-d", help="Description")
        parser.add_argument(
            "--categories", "-g", help="Comma-separated categories, e.g. \"开发, 工具\""
        )
        parser.add_argument("--icon", help="Favicon URL")

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def process_arguments(self, parsed_args: argparse.Namespace) -> Configuration:
        """
        Load configuration and set up logging.

        Raises:
            ValidationError: If the configuration path is invalid
            ConfigurationError: If the configuration does not load
        """
        config_path = validate_config_file(parsed_args.config)
        config = Configuration(config_path)
        config.update_from_args(
            {"verbose": parsed_args.verbose, "data_dir": parsed_args.data_dir}
        )
        setup_logging(config.config)
        return config

    @staticmethod
    def _collect_fields(parsed_args: argparse.Namespace) -> dict:
        fields = {}
        for name in EDITABLE_FIELDS:
            value = getattr(parsed_args, name, None)
            if value is None:
                continue
            if name == "categories":
                value = parse_category_input(value)
            else:
                value = value.strip()
            fields[name] = value
        return fields

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _cmd_list(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        bookmarks = filter_bookmarks(store.bookmarks, parsed_args.category, parsed_args.search)

        if parsed_args.html:
            print(render_cards_html(bookmarks))
            return 0

        if not bookmarks:
            print("No bookmarks found. Add one or clear the filters.")
            return 0

        for bookmark in bookmarks:
            print(format_bookmark(bookmark))
        return 0

    def _cmd_categories(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        print(f"All ({len(store)})")
        for category, count in category_counts(store.bookmarks).items():
            print(f"{category} ({count})")
        return 0

    def _cmd_add(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        store.add(self._collect_fields(parsed_args))
        print(store.bookmarks[0].id)
        return 0

    def _cmd_update(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        if store.get(parsed_args.id) is None:
            print(f"No bookmark with id {parsed_args.id}; nothing changed.")
            return 0
        store.update(parsed_args.id, self._collect_fields(parsed_args))
        print(f"Updated {parsed_args.id}")
        return 0

    def _cmd_remove(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        found = store.get(parsed_args.id) is not None
        store.remove(parsed_args.id)
        if found:
            print(f"Removed {parsed_args.id}")
        else:
            print(f"No bookmark with id {parsed_args.id}; nothing changed.")
        return 0

    def _cmd_export(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        exporter = config.create_exporter(parsed_args.format)

        if not parsed_args.output:
            sys.stdout.write(exporter.render(store.bookmarks) + "\n")
            return 0

        output_path = validate_output_file(parsed_args.output)
        result = exporter.export(store.bookmarks, output_path)
        for warning in result.warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        print(f"Exported {result.count} bookmarks to {result.path}")
        return 0

    def _cmd_import(self, parsed_args, config: Configuration, store: BookmarkStore) -> int:
        input_path = validate_input_file(parsed_args.file)
        try:
            result = config.create_importer().import_file(input_path, store)
        except ImportFormatError as e:
            print(f"Import failed: {e}", file=sys.stderr)
            return 1
        print(result)
        return 0

    def _handle_create_config(self, parsed_args) -> int:
        """Write a sample configuration file without touching the store."""
        output_path = Path(
            parsed_args.output or f"bookmark_manager.{parsed_args.format}"
        )
        if output_path.exists():
            print(f"Configuration file '{output_path}' already exists.", file=sys.stderr)
            return 1

        ConfigurationManager().create_sample_config(output_path, parsed_args.format)
        print(f"Created configuration file: {output_path}")
        return 0

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        try:
            parsed_args = self.parse_args(args)

            if parsed_args.command == "create-config":
                return self._handle_create_config(parsed_args)

            config = self.process_arguments(parsed_args)

            logger = logging.getLogger(__name__)
            logger.debug(f"Command: {parsed_args.command}")
            logger.debug(f"Configuration file: {config.source}")
            logger.debug(f"Data directory: {config.get_data_dir()}")

            store = config.create_store()
            store.init()

            handler = getattr(self, f"_cmd_{parsed_args.command}")
            return handler(parsed_args, config, store)

        except BookmarkManagerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1


def format_bookmark(bookmark: Bookmark) -> str:
    """Plain-text listing entry for one bookmark."""
    lines = [f"[{bookmark.id}] {bookmark.title}", f"    {bookmark.url}"]
    if bookmark.desc:
        lines.append(f"    {bookmark.desc}")
    if bookmark.categories:
        lines.append(f"    {' · '.join(bookmark.categories)}")
    icon = bookmark.get_effective_icon()
    if icon:
        lines.append(f"    icon: {icon}")
    return "\n".join(lines)


def render_cards_html(bookmarks: List[Bookmark]) -> str:
    """
    Render bookmarks as an HTML fragment of cards.

    Every interpolated value is HTML-escaped.
    """
    if not bookmarks:
        return '<p class="empty">No bookmarks found. Add one or clear the filters.</p>'

    cards = []
    for bookmark in bookmarks:
        cards.append(
            "\n".join(
                [
                    f'<div class="card" data-id="{escape_html(bookmark.id)}">',
                    f'  <div class="favicon"><img src="{escape_html(bookmark.get_effective_icon())}"'
                    f' alt="{escape_html(bookmark.title)}"></div>',
                    '  <div class="meta">',
                    f'    <h4><a href="{escape_html(bookmark.url)}" target="_blank"'
                    f' rel="noopener">{escape_html(bookmark.title)}</a></h4>',
                    f"    <p>{escape_html(bookmark.desc)}</p>",
                    f'    <div class="tags">{escape_html(" · ".join(bookmark.categories))}</div>',
                    "  </div>",
                    "</div>",
                ]
            )
        )
    return "\n".join(cards)


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
