"""askgpt 命令行入口。

用法::

    askgpt "你的问题"
    askgpt -c ./config.yaml "你的问题"
    askgpt --set default_adapter=claude_adapter
    askgpt --edit
    askgpt --list-abilities
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ask_core import __version__
from ask_core.config.config_file import (
    load_settings,
    open_in_editor,
    parse_assignment,
    read_config,
    resolve_config_path,
    set_value,
    write_config,
)
from ask_core.console import process_response_stream
from ask_core.domain.exceptions import BusinessError
from ask_core.infrastructure.logging.logger import logger, setup_logger
from ask_core.providers import create_adapter
from ask_core.tools.abilities import list_function_declarations


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="askgpt",
        description="Ask an LLM a question and stream the answer to the terminal.",
    )
    parser.add_argument("question", nargs="?", help="The question to ask")
    parser.add_argument("-c", "--config", help="Path to the configuration file")
    parser.add_argument("--set", metavar="KEY=VALUE", help="Set a configuration value, e.g. openai_adapter.token=sk-...")
    parser.add_argument("-e", "--edit", action="store_true", help="Open the configuration file in an editor")
    parser.add_argument("--list-abilities", action="store_true", help="List function declarations under ./abilities")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _update_config(config_path, assignment: str) -> None:
    key, value = parse_assignment(assignment)
    data = set_value(read_config(config_path), key, value)
    write_config(config_path, data)
    logger.info("Configuration updated: %s", key)
    print("Configuration updated successfully.")


def _list_abilities() -> None:
    for decl in list_function_declarations():
        print(f"{decl.name} ({decl.type}): {decl.description}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config_path = resolve_config_path(args.config)
        if args.set:
            _update_config(config_path, args.set)
            return 0
        if args.edit:
            return open_in_editor(config_path)
        if args.list_abilities:
            _list_abilities()
            return 0

        settings = load_settings(config_path)
        setup_logger(
            settings.logging.level,
            settings.logging.log_dir,
            settings.logging.redact_content,
        )
        if not args.question:
            parser.print_usage(sys.stderr)
            print("Usage: askgpt <your_question>", file=sys.stderr)
            return 2
        adapter = create_adapter(settings.active_provider())
    except BusinessError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    ok = process_response_stream(adapter, args.question)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
