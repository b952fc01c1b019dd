import json
from pathlib import Path

from sparkmd.results.notifications import Notification, NotificationLog


def test_append_and_read_round_trip(tmp_path: Path) -> None:
    log = NotificationLog(tmp_path / "state" / "notifications.jsonl")
    first = Notification.create("n1", "success", "Summary written", file="a.md", line=3)
    second = Notification.create("n2", "info", "Queued")

    log.append(first)
    log.append(second)

    assert log.read() == [first, second]


def test_payload_omits_missing_fields(tmp_path: Path) -> None:
    log = NotificationLog(tmp_path / "notifications.jsonl")
    log.append(Notification.create("n1", "warning", "Careful"))

    payload = json.loads(log.path.read_text(encoding="utf-8"))

    assert set(payload) == {"id", "type", "message", "timestamp"}
    assert isinstance(payload["timestamp"], int)


def test_read_skips_malformed_lines(tmp_path: Path) -> None:
    path = tmp_path / "notifications.jsonl"
    path.write_text(
        "\n".join(
            [
                "not json",
                json.dumps({"id": "n1", "type": "error", "message": "bad", "timestamp": 1}),
                json.dumps({"id": "n2", "type": "unknown", "message": "skip"}),
                "",
                json.dumps(["a", "list"]),
            ]
        ),
        encoding="utf-8",
    )

    notifications = NotificationLog(path).read()

    assert [(item.id, item.timestamp) for item in notifications] == [("n1", 1)]


def test_missing_log_reads_empty(tmp_path: Path) -> None:
    assert NotificationLog(tmp_path / "absent.jsonl").read() == []
