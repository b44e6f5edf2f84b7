"""Audit logging for threading and drafting events."""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional


class AuditLog:
    """
    Append-only JSON-lines event log.

    Instances are callable with ``(event_type, fields)`` and can be passed
    to the resolvers as a trace sink.
    """

    def __init__(self, log_path: Optional[Path] = None):
        """
        Initialize audit logger.

        Args:
            log_path: Path to audit log file (default: ~/.mailthread/logs/audit.log)
        """
        if log_path is None:
            log_path = Path("~/.mailthread/logs/audit.log").expanduser()

        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def __call__(self, event_type: str, fields: dict) -> None:
        self.log_event(event_type, fields)

    def log_event(self, event_type: str, fields: dict) -> None:
        """
        Log a trace event.

        Args:
            event_type: Type of event (e.g., "thread_key.derived", "draft.built")
            fields: Event fields; values that are not JSON types are stringified
        """
        event = {
            **fields,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
        }

        self._write_event(event)

    def read_events(self, event_type: Optional[str] = None) -> list[dict]:
        """
        Read logged events, skipping lines that are not valid JSON.

        Args:
            event_type: Only return events of this type

        Returns:
            List of event dicts in log order
        """
        events = []

        if not self.log_path.exists():
            return events

        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if event_type is None or event.get("event_type") == event_type:
                    events.append(event)

        return events

    def export_events(self, output_path: Path) -> None:
        """
        Export all events to a JSON file.

        Args:
            output_path: Path to output JSON file
        """
        events = self.read_events()

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(events, f, indent=2, ensure_ascii=False)

    def _write_event(self, event: dict) -> None:
        """
        Write event to log file.

        Args:
            event: Event dictionary
        """
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
