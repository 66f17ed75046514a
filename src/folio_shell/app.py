from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List

from folio_shell.core.handlers.complete_handler import complete_help_text, handle_complete
from folio_shell.core.handlers.merge_handler import handle_merge, merge_help_text
from folio_shell.core.handlers.validate_handler import handle_validate, validate_help_text
from folio_shell.core.managers.config_manager import config_manager
from folio_shell.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

CommandRegistry: Dict[str, Callable[[List[str]], int]] = {
    "validate": handle_validate,
    "complete": handle_complete,
    "merge": handle_merge,
}

COMMAND_HELP_TEXTS: Dict[str, str] = {
    "validate": validate_help_text,
    "complete": complete_help_text,
    "merge": merge_help_text,
}


def print_help() -> None:
    print("Usage: folio <command> [options]\n")
    print("Commands:")
    for text in COMMAND_HELP_TEXTS.values():
        print(f"  {text}\n")
    print("Global options:")
    print("  --set <key>=<value>   Override a settings.json value for this run (e.g. debug.level=INFO).")


def _apply_overrides(argv: List[str]) -> List[str]:
    """Consumes leading '--set key=value' pairs and applies them to the config."""
    remaining = list(argv)
    while len(remaining) >= 2 and remaining[0] == "--set":
        key, _, value = remaining[1].partition("=")
        if key and value:
            config_manager.set_nested(key, value)
        else:
            logger.warning("Ignoring malformed override '%s' (expected key=value).", remaining[1])
        remaining = remaining[2:]
    return remaining


def setup_logging() -> None:
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        config_manager.get_nested("debug.module_levels"),
        config_manager.get_nested("debug.silenced"),
    )


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the auditor from the command line."""
    args = _apply_overrides(sys.argv[1:] if argv is None else argv)
    setup_logging()

    if not args or args[0] in ("-h", "--help", "help"):
        print_help()
        return 0

    command, command_args = args[0], args[1:]
    handler = CommandRegistry.get(command)
    if handler is None:
        print(f"❌ Unknown command: '{command}'")
        print_help()
        return 1

    logger.debug("Dispatching command '%s' with %d argument(s)", command, len(command_args))
    return handler(command_args)


if __name__ == "__main__":
    sys.exit(main())
