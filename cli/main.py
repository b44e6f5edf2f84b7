"""Main CLI entry point for mailthread."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from mailthread.config.config_loader import ConfigError, ConfigLoader
from mailthread.config.threading_config import AppConfig
from mailthread.models.parsed_message import MessageContractError, ParsedMessage
from mailthread.models.reply_draft import DraftAction
from mailthread.services.correspondence.correspondence_resolver import CorrespondenceResolver
from mailthread.services.threads.conversation_grouper import ConversationGrouper
from mailthread.services.threads.thread_resolver import ThreadIdentityResolver
from mailthread.services.tracing import CompositeTraceSink, LoggingTraceSink, TraceSink
from mailthread.storage.audit_log import AuditLog

ACTION_NAMES = {
    "reply": DraftAction.REPLY,
    "reply-all": DraftAction.REPLY_ALL,
    "forward": DraftAction.FORWARD,
}


def load_messages(paths: list[Path]) -> list[ParsedMessage]:
    """
    Load ParsedMessage records from JSON files.

    Each file holds one message object or a list of them.

    Raises:
        FileNotFoundError: If a file doesn't exist
        MessageContractError: If a record lacks a required field
    """
    messages = []
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        records = data if isinstance(data, list) else [data]
        for record in records:
            if not isinstance(record, dict):
                raise MessageContractError(f"Expected a JSON object in {path}")
            messages.append(ParsedMessage.from_dict(record))
    return messages


def build_trace(config: AppConfig, verbose: bool = False) -> TraceSink:
    """Trace sink from config: logging, plus the audit log when a path is configured."""
    level = logging.DEBUG if verbose else getattr(logging, config.tracing.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    sinks: list[TraceSink] = [LoggingTraceSink()]
    audit_path = config.tracing.get_audit_log_path()
    if audit_path:
        sinks.append(AuditLog(audit_path))
    return CompositeTraceSink(*sinks)


def cmd_thread_key(args, config: AppConfig, trace: TraceSink) -> None:
    """Print the thread key of every message."""
    resolver = ThreadIdentityResolver(config.threading, trace)
    for message in load_messages(args.messages):
        print(f"{message.id}\t{resolver.thread_key_for(message)}")


def cmd_group(args, config: AppConfig, trace: TraceSink) -> None:
    """Print conversations as JSON."""
    grouper = ConversationGrouper(ThreadIdentityResolver(config.threading, trace))
    conversations = grouper.group(load_messages(args.messages))

    output = [
        {
            "key": conversation.key,
            "subject": conversation.original_subject,
            "count": conversation.count,
            "participants": grouper.display_participants(conversation, args.user),
            "summary": grouper.summarize(conversation),
            "messages": [message.id for message in conversation.messages],
        }
        for conversation in conversations
    ]
    print(json.dumps(output, indent=2, ensure_ascii=False))


def cmd_draft(args, config: AppConfig, trace: TraceSink) -> None:
    """Print a reply/reply-all/forward draft for each message as JSON."""
    resolver = CorrespondenceResolver(config.correspondence, trace)
    action = ACTION_NAMES[args.action]

    drafts = []
    for message in load_messages(args.messages):
        draft = resolver.build(action, message, args.user)
        entry = draft.to_dict()
        entry["showReplyAll"] = resolver.should_show_reply_all(message, args.user)
        drafts.append(entry)

    print(json.dumps(drafts if len(drafts) != 1 else drafts[0], indent=2, ensure_ascii=False))


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="mailthread - conversation threading and reply drafting")
    parser.add_argument("--config", type=Path, help="Custom config file path")
    parser.add_argument("--verbose", action="store_true", help="Enable trace logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    key_parser = subparsers.add_parser("thread-key", help="Print thread keys")
    key_parser.add_argument("messages", nargs="+", type=Path, help="Message JSON file(s)")

    group_parser = subparsers.add_parser("group", help="Group messages into conversations")
    group_parser.add_argument("messages", nargs="+", type=Path, help="Message JSON file(s)")
    group_parser.add_argument("--user", help="Current user email")

    draft_parser = subparsers.add_parser("draft", help="Build a reply, reply-all or forward draft")
    draft_parser.add_argument("action", choices=sorted(ACTION_NAMES), help="Draft action")
    draft_parser.add_argument("messages", nargs="+", type=Path, help="Message JSON file(s)")
    draft_parser.add_argument("--user", help="Current user email")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = ConfigLoader(args.config).load_app_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    trace = build_trace(config, args.verbose)
    commands = {
        "thread-key": cmd_thread_key,
        "group": cmd_group,
        "draft": cmd_draft,
    }

    try:
        commands[args.command](args, config, trace)
    except (OSError, json.JSONDecodeError, MessageContractError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
