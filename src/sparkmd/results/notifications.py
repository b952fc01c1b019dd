"""Append-only JSONL notification log read by the UI layer."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Literal

NotificationType = Literal["success", "error", "warning", "info", "progress"]
NOTIFICATION_TYPES = frozenset({"success", "error", "warning", "info", "progress"})


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    message: str
    timestamp: int
    file: str | None = None
    line: int | None = None
    link: str | None = None

    @classmethod
    def create(
        cls,
        notification_id: str,
        type: NotificationType,
        message: str,
        *,
        file: str | None = None,
        line: int | None = None,
        link: str | None = None,
    ) -> Notification:
        return cls(
            id=notification_id,
            type=type,
            message=message,
            timestamp=int(time.time() * 1000),
            file=file,
            line=line,
            link=link,
        )

    def to_payload(self) -> dict[str, object]:
        return {key: value for key, value in asdict(self).items() if value is not None}

    @staticmethod
    def from_payload(payload: object) -> Notification | None:
        if not isinstance(payload, dict):
            return None
        notification_id = payload.get("id")
        kind = payload.get("type")
        message = payload.get("message")
        if not isinstance(notification_id, str) or kind not in NOTIFICATION_TYPES or not isinstance(message, str):
            return None
        timestamp = payload.get("timestamp", 0)
        line = payload.get("line")
        return Notification(
            id=notification_id,
            type=kind,
            message=message,
            timestamp=timestamp if isinstance(timestamp, int) else 0,
            file=payload.get("file") if isinstance(payload.get("file"), str) else None,
            line=line if isinstance(line, int) else None,
            link=payload.get("link") if isinstance(payload.get("link"), str) else None,
        )


class NotificationLog:
    """One notifications file; appends are serialized within the process."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def append(self, notification: Notification) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8", errors="backslashreplace") as handle:
                handle.write(json.dumps(notification.to_payload(), ensure_ascii=False) + "\n")

    def read(self) -> list[Notification]:
        with self._lock:
            if not self.path.exists():
                return []
            notifications: list[Notification] = []
            with self.path.open("r", encoding="utf-8") as handle:
                for raw_line in handle:
                    line = raw_line.strip()
                    if not line:
                        continue
                    try:
                        payload = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    notification = Notification.from_payload(payload)
                    if notification is not None:
                        notifications.append(notification)
            return notifications
