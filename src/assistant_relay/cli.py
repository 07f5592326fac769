"""Command line interface for talking to a hosted assistant."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Mapping, Sequence

from .config import AssistantConfig
from .core import AssistantAdapterError, Message, MessageRole
from .core.adapters import OpenAIAssistantAdapter


def _current_time_instructions(now: datetime | None = None) -> str:
    moment = now or datetime.now()
    return f"The current time is: {moment.strftime('%Y-%m-%d %H:%M:%S')}"


def _load_history(path: Path) -> list[Message]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise argparse.ArgumentTypeError(f"cannot read history file '{path}': {exc.strerror or exc}") from exc
    payload = json.loads(raw)
    if not isinstance(payload, list):
        raise argparse.ArgumentTypeError(f"history file '{path}' must contain a JSON list")
    return [Message.from_mapping(item) for item in payload]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run conversations against a hosted OpenAI assistant")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    connection = argparse.ArgumentParser(add_help=False)
    connection.add_argument("--base-url", help="API root, defaults to $BASE_URL or the public endpoint")
    connection.add_argument("--api-key", help="API key, defaults to $API_KEY")
    connection.add_argument("--assistant-id", help="Assistant identifier, defaults to $ASSISTANT_ID")
    connection.add_argument("--timeout", type=float, help="Per-request timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ask_parser = subparsers.add_parser(
        "ask", parents=[connection], help="send a message and print the assistant's answer"
    )
    ask_parser.add_argument("message", help="User message to send")
    ask_parser.add_argument("-s", "--system", default="", help="System prompt prepended to the conversation")
    ask_parser.add_argument(
        "--history",
        type=Path,
        help="JSON file with prior turns as [{\"role\": ..., \"content\": ...}]",
    )
    ask_parser.add_argument(
        "--instructions",
        help="Additional run instructions, defaults to the current local time",
    )

    subparsers.add_parser("info", parents=[connection], help="print the advertised model info as JSON")

    return parser


def _resolve_config(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None,
    *,
    additional_instructions: str | None = None,
) -> AssistantConfig:
    base = AssistantConfig.from_env(environ)
    return AssistantConfig(
        base_url=args.base_url or base.base_url,
        api_key=args.api_key or base.api_key,
        assistant_id=args.assistant_id or base.assistant_id,
        request_timeout=args.timeout if args.timeout is not None else base.request_timeout,
        additional_instructions=additional_instructions,
    )


def _handle_ask(args: argparse.Namespace, environ: Mapping[str, str] | None) -> int:
    instructions = args.instructions if args.instructions is not None else _current_time_instructions()
    config = _resolve_config(args, environ, additional_instructions=instructions)
    adapter = OpenAIAssistantAdapter(config)

    history = _load_history(args.history) if args.history else []
    conversation = [*history, Message(role=MessageRole.USER, content=args.message)]

    try:
        answer = asyncio.run(adapter.complete(args.system, conversation))
    except AssistantAdapterError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    sys.stdout.write(answer)
    if not answer.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def _handle_info(args: argparse.Namespace, environ: Mapping[str, str] | None) -> int:
    adapter = OpenAIAssistantAdapter(_resolve_config(args, environ))
    sys.stdout.write(json.dumps(asdict(adapter.model_info()), indent=2) + "\n")
    return 0


def main(argv: Sequence[str] | None = None, *, environ: Mapping[str, str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
    )
    try:
        if args.command == "ask":
            return _handle_ask(args, environ)
        if args.command == "info":
            return _handle_info(args, environ)
    except (ValueError, TypeError, argparse.ArgumentTypeError) as exc:
        parser.error(str(exc))
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
