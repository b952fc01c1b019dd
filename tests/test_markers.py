from sparkmd.parser.command_detector import detect_line_command
from sparkmd.parser.markers import escape_message, parse_chat_opener, render_chat_opener, replace_chat_status
from sparkmd.parser.types import ChatStatus


def test_rendered_opener_parses_back() -> None:
    line = render_chat_opener(ChatStatus.PENDING, "abc-123", "betty", "first: line\nsecond line")

    assert line == r"<!-- spark-inline-chat:pending:abc-123:betty:first: line\nsecond line -->"
    opener = parse_chat_opener(line)
    assert opener is not None
    assert (opener.status, opener.id, opener.agent) == (ChatStatus.PENDING, "abc-123", "betty")
    assert opener.message == "first: line\nsecond line"


def test_legacy_opener_renders_without_agent() -> None:
    line = render_chat_opener("complete", "abc")

    assert line == "<!-- spark-inline-chat:complete:abc -->"
    opener = parse_chat_opener(line)
    assert opener is not None
    assert opener.is_extended is False


def test_escape_message_normalizes_crlf() -> None:
    assert escape_message("one\r\ntwo\nthree") == r"one\ntwo\nthree"


def test_invalid_chat_id_is_not_an_opener() -> None:
    assert parse_chat_opener("<!-- spark-inline-chat:pending:bad id -->") is None
    assert replace_chat_status("plain text", "error") is None


def test_lines_without_sigils_are_skipped() -> None:
    assert detect_line_command("no commands here") is None
    assert detect_line_command("✅ done and dusted") is None
    assert detect_line_command("/summarize now") is not None
