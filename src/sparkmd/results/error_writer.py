"""Error reports under the vault state directory plus a notification entry."""

from __future__ import annotations

import json
import traceback
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from sparkmd.errors import SparkError
from sparkmd.results.notifications import Notification, NotificationLog

if TYPE_CHECKING:
    from sparkmd.config import Settings

STATE_DIR_NAME = ".spark"
LOGS_DIR_NAME = "logs"
NOTIFICATIONS_FILE_NAME = "notifications.jsonl"

_CONFIG_SUGGESTIONS = (
    "Check your `.spark/config.yaml` file for syntax errors",
    "Run `sparkmd parse <file>` to confirm the document itself parses",
    "Compare against a known-good configuration",
)
_UPSTREAM_SUGGESTIONS = (
    "This is usually a temporary provider issue; the request can be retried",
    "Check your AI provider status page for outages",
    "Check that your API key is valid and not expired",
)

SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "API_KEY_NOT_SET": (
        "Open the Spark plugin settings",
        "Add your API key in the provider settings",
        "Get an API key from your AI provider dashboard",
    ),
    "CONFIG_ERROR": _CONFIG_SUGGESTIONS,
    "CONFIG_LOAD_FAILED": _CONFIG_SUGGESTIONS,
    "INVALID_CONFIG": _CONFIG_SUGGESTIONS,
    "AI_NETWORK_ERROR": (
        "Check your internet connection",
        "Verify you can reach the AI provider API endpoint",
        "Check if a firewall or VPN is blocking the connection",
    ),
    "AI_CLIENT_ERROR": _UPSTREAM_SUGGESTIONS,
    "AI_SERVER_ERROR": _UPSTREAM_SUGGESTIONS,
    "RESULT_WRITE_ERROR": (
        "Check file permissions in your vault",
        "Ensure the file still exists",
        "Check whether another application holds the file open",
        "Verify sufficient disk space is available",
    ),
    "EMPTY_LINE": (
        "The command line appears to be empty",
        "Ensure your command includes the full instruction",
    ),
}


def _default_error_id() -> str:
    return uuid.uuid4().hex[:9]


def error_message(error: object) -> str:
    """Normalize exceptions, strings and structured payloads to one message."""

    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    if isinstance(error, str):
        return error
    if isinstance(error, Mapping) and isinstance(error.get("message"), str):
        return error["message"]
    return "Unknown error"


def error_code(error: object) -> str | None:
    if isinstance(error, SparkError):
        return error.code
    if isinstance(error, Mapping) and isinstance(error.get("code"), str):
        return error["code"]
    return None


def error_details(error: object) -> dict[str, Any] | None:
    if isinstance(error, SparkError):
        return error.context or None
    if isinstance(error, Mapping):
        return {str(key): value for key, value in error.items()} or None
    return None


def suggestions_for(error: object) -> tuple[str, ...]:
    code = error_code(error)
    if code is None:
        return ()
    return SUGGESTIONS.get(code, ())


def format_error_report(
    *,
    error: object,
    error_id: str,
    timestamp: datetime,
    file_path: str | Path,
    command_line: int | None = None,
    command_text: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> str:
    """Render the markdown body of one error report."""

    lines = [
        "# Error Report",
        "",
        f"**ID:** {error_id}",
        f"**Time:** {timestamp.isoformat(timespec='seconds')}",
        f"**File:** {Path(file_path).name}",
        f"**Full Path:** {file_path}",
    ]
    if command_line is not None:
        lines.append(f"**Line:** {command_line}")

    lines.extend(["", "## Error", error_message(error)])
    code = error_code(error)
    if code:
        lines.extend(["", f"**Error Code:** {code}"])

    suggestions = suggestions_for(error)
    if suggestions:
        lines.extend(["", "## Suggestions"])
        lines.extend(f"{index}. {item}" for index, item in enumerate(suggestions, start=1))

    if isinstance(error, BaseException):
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()
        lines.extend(["", "## Stack Trace", "```", trace, "```"])

    if command_text:
        lines.extend(["", "## Command", "```markdown", command_text, "```"])

    details = error_details(error)
    if details:
        lines.extend(["", "## Details", "```json", _to_json(details), "```"])

    if context:
        lines.extend(["", "## Context", "```json", _to_json(dict(context)), "```"])

    return "\n".join(lines) + "\n"


def _to_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


class ErrorWriter:
    """Write failure reports without ever failing the caller."""

    def __init__(
        self,
        vault_path: str | Path,
        *,
        state_dir: str = STATE_DIR_NAME,
        notifications: NotificationLog | None = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _default_error_id,
    ) -> None:
        self.vault_path = Path(vault_path)
        self.state_dir = state_dir
        self.logs_dir = self.vault_path / state_dir / LOGS_DIR_NAME
        self.notifications = notifications or NotificationLog(self.vault_path / state_dir / NOTIFICATIONS_FILE_NAME)
        self._clock = clock
        self._id_factory = id_factory

    @classmethod
    def from_settings(cls, settings: Settings) -> ErrorWriter:
        return cls(
            settings.vault_path,
            state_dir=settings.state_dir,
            notifications=NotificationLog(settings.notifications_path),
        )

    def write_error(
        self,
        *,
        error: object,
        file_path: str | Path,
        command_line: int | None = None,
        command_text: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> Path:
        """Write a report and a notification; return the report path.

        The path is returned even when the report could not be written.
        """

        error_id = self._id_factory()
        now = self._clock()
        report_name = f"error-{now:%Y-%m-%d-%H%M%S}-{error_id}.md"
        report_path = self.logs_dir / report_name
        link = f"{self.state_dir}/{LOGS_DIR_NAME}/{report_name}"
        message = error_message(error)

        try:
            content = format_error_report(
                error=error,
                error_id=error_id,
                timestamp=now,
                file_path=file_path,
                command_line=command_line,
                command_text=command_text,
                context=context,
            )
        except Exception:
            logger.exception("error_report.format_failed file={}", file_path)
            content = f"# Error Report\n\n**ID:** {error_id}\n\n## Error\n{message}\n"

        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            report_path.write_text(content, encoding="utf-8", errors="backslashreplace")
        except (OSError, ValueError) as exc:
            logger.error("error_report.write_failed path={} reason={}", report_path, exc)

        try:
            self.notifications.append(
                Notification.create(
                    error_id,
                    "error",
                    message,
                    file=str(file_path),
                    line=command_line,
                    link=link,
                )
            )
        except (OSError, ValueError) as exc:
            logger.error("error_report.notification_failed path={} reason={}", self.notifications.path, exc)

        logger.error(
            "command.failed error_id={} file={} line={} report={} error={}",
            error_id,
            file_path,
            command_line,
            link,
            message,
        )
        return report_path
