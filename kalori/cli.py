# -*- coding: utf-8 -*-
"""
Command line tools for the Kalori backend.

Usage:
    kalori serve [--host HOST] [--port PORT] [--reload]
    kalori seed [--menu-dir DIR]
    kalori sync-images [--dry-run]
    kalori token <user_id> [--email EMAIL]
    kalori settings show
    kalori settings set <name> <value>
    kalori menu [--token TOKEN] [--visible-only]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import settings

logger = logging.getLogger("kalori")


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "kalori.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    """Rebuild categories, items and order from the menu image folders."""
    from .app_db import init_app_db
    from .auth.storage import add_admin_emails, list_admin_emails
    from .menu.catalog import get_canonical_menu
    from .menu.storage import seed_menu

    menu_dir = Path(args.menu_dir) if args.menu_dir else settings.menu_dir
    print(f"Menu directory: {menu_dir}")
    print(f"Database path: {settings.app_db_path}")

    init_app_db(settings.app_db_path)
    categories = get_canonical_menu(menu_dir)
    count = seed_menu(categories, replace=True)
    for category in categories:
        print(f"  {category.label}: {len(category.items)} items")
    print(f"Seeded {count} menu items")

    add_admin_emails(settings.admin_emails)
    admins = list_admin_emails()
    print(f"Admins: {', '.join(admins) if admins else '(none)'}")
    return 0


def cmd_sync_images(args: argparse.Namespace) -> int:
    """Upload local /menu/... images to the image host and rewrite item URLs."""
    from .app_db import init_app_db
    from .errors import ValidationError
    from .images.hosting import ImageHostError, build_image_host
    from .images.validation import read_image_file
    from .menu.storage import list_item_images, set_item_image

    init_app_db(settings.app_db_path)
    host = build_image_host()
    updated = skipped = missing = failed = 0

    for row in list_item_images():
        image_path = row.get("image_path") or ""
        if not image_path.startswith("/menu/"):
            skipped += 1
            continue
        local = settings.menu_dir / image_path[len("/menu/"):]
        if not local.is_file():
            print(f"Missing: {row['id']} -> {local}")
            missing += 1
            continue
        if args.dry_run:
            print(f"Would upload: {row['id']} <- {local}")
            updated += 1
            continue
        folder = "menu/" + local.parent.name
        try:
            uploaded = host.upload(read_image_file(local), folder=folder, public_id=local.stem, overwrite=True)
        except (ValidationError, ImageHostError) as exc:
            logger.error("Upload failed for %s: %s", row["id"], exc)
            failed += 1
            continue
        set_item_image(row["id"], image_path=uploaded.url, image_public_id=uploaded.public_id)
        print(f"Updated: {row['id']} -> {uploaded.url}")
        updated += 1

    print(f"Updated: {updated}, skipped: {skipped}, missing: {missing}, failed: {failed}")
    return 1 if failed else 0


def cmd_token(args: argparse.Namespace) -> int:
    """Mint a bearer token for local testing."""
    from .auth.security import create_access_token

    print(create_access_token(user_id=args.user_id, email=args.email))
    return 0


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def cmd_settings(args: argparse.Namespace) -> int:
    """Show or change the persisted client settings."""
    from .client_settings import SettingsStore

    store = SettingsStore(settings.client_settings_path)
    if args.action == "set":
        try:
            store.update(**{args.name: _parse_value(args.value)})
        except KeyError as exc:
            print(f"Error: {exc.args[0]}")
            return 1
    print(json.dumps(store.current.to_dict(), indent=2, ensure_ascii=False))
    return 0


async def _print_menu(args: argparse.Namespace) -> int:
    from .admin.client import MenuApiClient
    from .admin.dashboard import AdminDashboard
    from .menu.catalog import get_canonical_menu
    from .menu.overrides import LocalOverrideStore

    async with MenuApiClient(base_url=args.base_url, token=args.token) as client:
        dashboard = AdminDashboard(
            client,
            canonical=get_canonical_menu(settings.menu_dir),
            cache=LocalOverrideStore(settings.overrides_path),
        )
        dashboard.notices.subscribe(lambda notice: print(f"[{notice.level}] {notice.message}"))
        await dashboard.refresh()
        if dashboard.offline:
            print("(offline: showing canonical menu with cached overrides)")
        for category in dashboard.categories(include_hidden=not args.visible_only):
            print(f"\n{category.label}")
            print("-" * 50)
            for item in category.items:
                flag = " (hidden)" if item.hidden else ""
                print(f"  {item.name:<30} {item.calories:>5} kcal{flag}")
        stats = dashboard.stats()
        print(f"\nTotal: {stats.total_items} items, {stats.hidden_total} hidden")
    return 0


def cmd_menu(args: argparse.Namespace) -> int:
    """Print the effective admin menu."""
    return asyncio.run(_print_menu(args))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Kalori menu calorie backend CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # seed command
    seed_parser = subparsers.add_parser("seed", help="Rebuild the menu from image folders")
    seed_parser.add_argument("--menu-dir", help="Menu image directory (default: public/menu)")

    # sync-images command
    sync_parser = subparsers.add_parser("sync-images", help="Upload local menu images")
    sync_parser.add_argument("--dry-run", action="store_true", help="Only report what would be uploaded")

    # token command
    token_parser = subparsers.add_parser("token", help="Mint a development bearer token")
    token_parser.add_argument("user_id")
    token_parser.add_argument("--email")

    # settings command
    settings_parser = subparsers.add_parser("settings", help="Show or change client settings")
    settings_sub = settings_parser.add_subparsers(dest="action", required=True)
    settings_sub.add_parser("show", help="Print current settings")
    set_parser = settings_sub.add_parser("set", help="Change one setting")
    set_parser.add_argument("name")
    set_parser.add_argument("value", help="JSON value, e.g. true or \"dark\"")

    # menu command
    menu_parser = subparsers.add_parser("menu", help="Print the effective admin menu")
    menu_parser.add_argument("--base-url", default=None, help="API base URL")
    menu_parser.add_argument("--token", default=None, help="Bearer token")
    menu_parser.add_argument("--visible-only", action="store_true", help="Hide hidden items")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "serve": cmd_serve,
        "seed": cmd_seed,
        "sync-images": cmd_sync_images,
        "token": cmd_token,
        "settings": cmd_settings,
        "menu": cmd_menu,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
