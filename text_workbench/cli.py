#!/usr/bin/env python3
"""Command-line entry point for the text workbench.

Runs tools, scripts and saved batches against files on disk, using the
persisted configuration for scripts, AI actions and batches.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from .config import get_settings
from .editor import FileEditor
from .editor import TextBufferEditor
from .exceptions import TextWorkbenchError
from .logger_config import configure_logging
from .notifications import Notice
from .session import EditingSession
from .storage import create_config_store


class PrintingNotifier:
    """Prints notices to stderr so stdout stays usable for ``--dry-run``."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, message: str, success: bool = True) -> None:
        self.notices.append(Notice(message, success))
        print(f"{'[OK]' if success else '[X]'} {message}", file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="text-workbench", description="Text transformation workbench")
    parser.add_argument("--config", "-c", type=str, help="Configuration file (default: from settings)")
    parser.add_argument("--check-config", action="store_true", help="Show AI configuration status and exit.")

    commands = parser.add_subparsers(dest="command")

    commands.add_parser("tools", help="List registered tools")

    apply_parser = commands.add_parser("apply", help="Apply one tool to a file")
    apply_parser.add_argument("tool", help="Tool id, custom-script:<id> or custom-ai:<id>")
    apply_parser.add_argument("file", type=Path)
    apply_parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="PATH=VALUE",
        help="Override a setting, e.g. regex.find_text=foo (repeatable)",
    )
    apply_parser.add_argument("--no-frontmatter", action="store_true", help="Do not protect frontmatter")
    apply_parser.add_argument("--header", action="store_true", help="Protect the first line")
    apply_parser.add_argument("--dry-run", action="store_true", help="Print the result instead of writing it")

    batch_parser = commands.add_parser("batch", help="Run a saved batch on files")
    batch_parser.add_argument("batch_id")
    batch_parser.add_argument("files", nargs="+", type=Path)

    script_parser = commands.add_parser("script", help="Run a saved script on a file")
    script_parser.add_argument("script_id")
    script_parser.add_argument("file", type=Path)
    script_parser.add_argument("--dry-run", action="store_true", help="Print the result instead of writing it")

    return parser


def parse_override(raw: str) -> tuple[str, object]:
    """Split ``path=value``; the value is read as YAML so numbers and booleans keep their type."""
    path, sep, value = raw.partition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"Expected PATH=VALUE, got {raw!r}")
    return path.strip(), yaml.safe_load(value) if value else ""


def handle_config_check(config) -> None:
    ai = config.ai
    print("=== AI Configuration Status ===")
    print(f"Provider: {ai.provider}")
    print(f"Base URL: {ai.base_url or '-'}")
    print(f"Model: {ai.model or '-'}")
    print(f"Configured: {'[OK]' if ai.is_configured else '[X]'}")
    if not ai.is_configured:
        print(f"Missing: {', '.join(ai.missing_fields)}")


def _finish(document: FileEditor, dry_run: bool) -> None:
    if dry_run:
        sys.stdout.write(document.get_value())
    else:
        document.save()


async def run(args: argparse.Namespace) -> int:
    store = create_config_store(args.config)
    config = await store.load()
    notifier = PrintingNotifier()
    session_options = {"notifier": notifier, "store": store, "history_max_size": get_settings().history_max_size}

    if args.check_config:
        handle_config_check(config)
        return 0

    if args.command == "tools":
        session = EditingSession(config, TextBufferEditor(), **session_options)
        for strategy in session.registry.get_all():
            print(f"{strategy.id:24} {strategy.name}")
        for script in config.custom_scripts:
            print(f"{'custom-script:' + script.id:24} {script.name}")
        for action in config.custom_actions:
            print(f"{'custom-ai:' + action.id:24} {action.name}")
        return 0

    if args.command == "apply":
        document = FileEditor(args.file)
        session = EditingSession(config, document, **session_options)
        for raw in args.overrides:
            session.set_setting(*parse_override(raw))
        if args.no_frontmatter:
            session.set_setting("preserve_frontmatter", False)
        if args.header:
            session.set_setting("preserve_header", True)
        await session.apply_tool(args.tool, scope="note")
        _finish(document, args.dry_run)
        return 0 if not notifier_failed(notifier) else 1

    if args.command == "script":
        document = FileEditor(args.file)
        session = EditingSession(config, document, **session_options)
        await session.run_script(args.script_id)
        _finish(document, args.dry_run)
        return 0 if not notifier_failed(notifier) else 1

    if args.command == "batch":
        session = EditingSession(config, TextBufferEditor(), **session_options)
        outcome = await session.run_batch_on_files(args.batch_id, args.files)
        return 0 if outcome is not None else 1

    return 2


def notifier_failed(notifier: PrintingNotifier) -> bool:
    return any(not notice.success for notice in notifier.notices)


def main(argv: list[str] | None = None) -> int:
    """Run the command-line interface."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.command is None and not args.check_config:
        parser.print_help()
        return 2

    configure_logging(get_settings())
    try:
        return asyncio.run(run(args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except (TextWorkbenchError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 1


if __name__ == "__main__":
    sys.exit(main())
