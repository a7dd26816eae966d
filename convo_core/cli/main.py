"""
CLI_MAIN
========

Command-line interface for conversation management.

Conversations are read from a JSON file holding either a list of
messages or an object with a "messages" list. Results are printed to
stdout as JSON.

Global Flags:
    --server            Start the API server
    --port PORT         Port for API server (default: 8432)
    --config PATH       JSON configuration file
    --log-level LEVEL   Logging level (default: $CONVO_CORE_LOG_LEVEL or WARNING)
    --log-file PATH     Rotating log file (default: $CONVO_CORE_LOG_FILE)

Commands:
    manage FILE         Manage a conversation for an incoming message
    assess FILE         Show the health report
    clean FILE          Show the conversation after quality filtering
    summarize FILE      Show the extractive digest
    key-info FILE       Show identifiers, names, actions and topic

Usage:
    python -m convo_core.cli manage history.json --message "any update on 10119?"
    python -m convo_core.cli assess history.json
    python -m convo_core.cli --server --port 9000
"""

import argparse
import json
import os
import sys
from typing import Any, List, Optional

from pydantic import ValidationError

from ..config import ConfigError, ConversationConfig, load_conversation_config
from ..context import ConversationManager
from ..logging_config import LOG_LEVEL_ENV_VAR, setup_logging
from ..models import ChatMessage, coerce_messages

DEFAULT_PORT = 8432


def load_messages(path: str) -> List[ChatMessage]:
    """Read a conversation from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("messages", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of messages")
    return coerce_messages(data)


def _dump(payload: Any) -> str:
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [m.model_dump(mode="json", by_alias=True) for m in payload]
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ============================================================================
# CLI COMMANDS
# ============================================================================

def cli_manage(manager: ConversationManager, path: str, message: str) -> str:
    return _dump(manager.manage(load_messages(path), message))


def cli_assess(manager: ConversationManager, path: str) -> str:
    return _dump(manager.assess(load_messages(path)))


def cli_clean(manager: ConversationManager, path: str) -> str:
    return _dump(manager.clean(load_messages(path)))


def cli_summarize(manager: ConversationManager, path: str) -> str:
    return _dump({"summary": manager.summarize(load_messages(path))})


def cli_key_info(manager: ConversationManager, path: str) -> str:
    return _dump(manager.key_info(load_messages(path)))


def cli_start_server(port: int = DEFAULT_PORT, config: Optional[ConversationConfig] = None):
    """Start the API server with the given configuration."""
    import uvicorn
    from ..api.app import create_app

    print(f"\nconvo_core API Server")
    print(f"=" * 50)
    print(f"API Docs:    http://localhost:{port}/docs")
    print(f"\nPress Ctrl+C to stop\n")
    uvicorn.run(create_app(config), host="0.0.0.0", port=port)


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="convo_core",
        description="Bounded conversation-context manager",
    )
    parser.add_argument("--server", action="store_true", help="Start the API server")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT,
                        help=f"Port for API server (default: {DEFAULT_PORT})")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--log-level", default=os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING"),
                        help="Logging level")
    parser.add_argument("--log-file", help="Rotating log file")

    subparsers = parser.add_subparsers(dest="command")

    manage_parser = subparsers.add_parser(
        "manage",
        help="Manage a conversation",
        description="Window, clean or reset a conversation for an incoming message."
    )
    manage_parser.add_argument("file", help="Conversation JSON file")
    manage_parser.add_argument("--message", "-m", default="", help="Incoming user message")

    for name, help_text in (
        ("assess", "Show the health report"),
        ("clean", "Show the conversation after quality filtering"),
        ("summarize", "Show the extractive digest"),
        ("key-info", "Show identifiers, names, actions and topic"),
    ):
        sub = subparsers.add_parser(name, help=help_text, description=help_text + ".")
        sub.add_argument("file", help="Conversation JSON file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if not args.server and not args.command:
        parser.print_help()
        return 1

    try:
        config = load_conversation_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.server:
        cli_start_server(args.port, config)
        return 0

    try:
        manager = ConversationManager(config=config)

        if args.command == "manage":
            output = cli_manage(manager, args.file, args.message)
        elif args.command == "assess":
            output = cli_assess(manager, args.file)
        elif args.command == "clean":
            output = cli_clean(manager, args.file)
        elif args.command == "summarize":
            output = cli_summarize(manager, args.file)
        else:
            output = cli_key_info(manager, args.file)
    except (ConfigError, OSError, ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
