#!/usr/bin/env python3
"""
Album catalog command line client

Examples:
    python -m catalog_app list --band metallica
    python -m catalog_app add --band Slayer --title "Reign in Blood" --year 1986 --genre "Thrash Metal" --cover-file cover.jpg
    python -m catalog_app edit 3
    python -m catalog_app delete 3 --yes
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from core.config import CatalogClientConfig
from core.logger import setup_service_logger
from microservices.catalog_service.client import CatalogServiceClient

from .album_cache import AlbumCache
from .app import CatalogApp
from .console import ConsoleUI
from .local_storage import LocalStorage
from .state import AppStatus


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog_app", description="Album catalog client")
    parser.add_argument("--api-base", help="Catalog service URL (default: CATALOG_API_BASE)")
    parser.add_argument("--storage", help="Local storage file (default: CATALOG_STORAGE_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show albums (cached unless filtered or refreshed)")
    list_parser.add_argument("--band", help="Band name contains")
    list_parser.add_argument("--genre", help="Genre contains")
    list_parser.add_argument("--refresh", action="store_true", help="Ignore the local cache")

    add_parser = subparsers.add_parser("add", help="Create an album")
    add_parser.add_argument("--band", default="")
    add_parser.add_argument("--title", default="")
    add_parser.add_argument("--year", default="")
    add_parser.add_argument("--genre", default="")
    cover_group = add_parser.add_mutually_exclusive_group()
    cover_group.add_argument("--cover", default="", help="Filename already in the covers directory")
    cover_group.add_argument("--cover-file", help="Local image to upload as the cover")

    edit_parser = subparsers.add_parser("edit", help="Change an album's title")
    edit_parser.add_argument("album_id", type=int)

    delete_parser = subparsers.add_parser("delete", help="Delete an album")
    delete_parser.add_argument("album_id", type=int)
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    subparsers.add_parser("clear-cache", help="Forget the locally cached album list")

    return parser


async def run(args: argparse.Namespace, config: CatalogClientConfig, ui: ConsoleUI) -> int:
    storage = LocalStorage(config.storage_path)
    cache = AlbumCache(storage, max_age=config.cache_max_age)

    if args.command == "clear-cache":
        cache.clear()
        ui.alert("Local album cache cleared.")
        return 0

    async with CatalogServiceClient(config.api_base_url, timeout=config.http_timeout) as client:
        app = CatalogApp(client, cache, ui)

        if args.command == "list":
            if args.band or args.genre:
                await app.search(band=args.band or "", genre=args.genre or "")
            else:
                await app.activate(refresh=args.refresh)
            if app.state.status == AppStatus.ERROR:
                ui.alert(app.state.error)
            ui.render_albums(app.albums)

        elif args.command == "add":
            form = app.state.form
            form.band, form.title, form.year, form.genre = args.band, args.title, args.year, args.genre
            if args.cover_file:
                form.choose_file(args.cover_file)
            else:
                form.cover = args.cover
            await app.activate()
            created = await app.create_album()
            if created is None:
                return 1
            ui.render_albums([created])

        elif args.command in ("edit", "delete"):
            await app.activate()
            album = app.find_album(args.album_id)
            if album is None:
                ui.alert(f"Album {args.album_id} is not in the local list.")
                return 1
            if args.command == "edit":
                updated = await app.edit_title(album)
                if updated:
                    ui.render_albums([updated])
            else:
                ui.assume_yes = args.yes
                await app.delete_album(args.album_id)

        return 1 if app.state.status == AppStatus.ERROR else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = CatalogClientConfig.from_env()
    if args.api_base:
        config.api_base_url = args.api_base.rstrip("/")
    if args.storage:
        config.storage_path = args.storage

    setup_service_logger("catalog_app", level="DEBUG" if args.verbose else "WARNING")
    return asyncio.run(run(args, config, ConsoleUI()))


if __name__ == "__main__":
    sys.exit(main())
