from sparkmd.parser.inline_chat import (
    detect_inline_chats,
    find_inline_chat,
    get_pending_inline_chats,
    has_pending_inline_chats,
    is_inside_inline_chat,
)
from sparkmd.parser.types import ChatStatus, MentionType


def _chat(opener: str, *body: str) -> str:
    return "\n".join([opener, *body, "<!-- /spark-inline-chat -->"])


def test_extended_marker_builds_user_message_and_mentions() -> None:
    text = _chat("<!-- spark-inline-chat:pending:abc-123:betty:Tell me about @finance -->")

    chats = detect_inline_chats(text)

    assert len(chats) == 1
    chat = chats[0]
    assert chat.id == "abc-123"
    assert chat.status is ChatStatus.PENDING
    assert chat.agent == "betty"
    assert chat.user_message == "@betty Tell me about @finance"
    assert chat.mentions is not None
    assert [(mention.type, mention.value) for mention in chat.mentions] == [
        (MentionType.AGENT, "betty"),
        (MentionType.AGENT, "finance"),
    ]
    assert (chat.start_line, chat.end_line) == (1, 2)
    assert chat.raw == text


def test_marker_whitespace_is_tolerated() -> None:
    text = _chat("<!--   spark-inline-chat : pending : abc-1 : betty : hi there   -->")

    chat = detect_inline_chats(text)[0]

    assert chat.id == "abc-1"
    assert chat.user_message == "@betty hi there"


def test_escaped_newlines_are_unescaped() -> None:
    text = _chat(r"<!-- spark-inline-chat:pending:abc:betty:line one\nline two -->")

    chat = detect_inline_chats(text)[0]

    assert chat.user_message == "@betty line one\nline two"


def test_message_already_addressed_to_agent_is_not_prefixed_twice() -> None:
    text = _chat("<!-- spark-inline-chat:pending:abc:betty:@betty what next? -->")

    assert detect_inline_chats(text)[0].user_message == "@betty what next?"


def test_legacy_marker_prefers_user_line() -> None:
    text = _chat("<!-- spark-inline-chat:pending:abc -->", "User: What is @finance/ doing?", "ignored")

    chat = detect_inline_chats(text)[0]

    assert chat.user_message == "What is @finance/ doing?"
    assert chat.mentions is not None
    assert [(mention.type, mention.value) for mention in chat.mentions] == [(MentionType.FOLDER, "finance/")]


def test_legacy_marker_falls_back_to_first_body_line() -> None:
    text = _chat("<!-- spark-inline-chat:pending:abc -->", "  summarize @notes.md  ", "second line")

    assert detect_inline_chats(text)[0].user_message == "summarize @notes.md"


def test_complete_block_body_is_ai_response_verbatim() -> None:
    text = _chat("<!-- spark-inline-chat:complete:abc -->", "First line", "", "  Third line")

    chat = detect_inline_chats(text)[0]

    assert chat.ai_response == "First line\n\n  Third line"
    assert chat.user_message is None
    assert chat.mentions is None


def test_complete_block_with_empty_body() -> None:
    chat = detect_inline_chats(_chat("<!-- spark-inline-chat:complete:abc -->"))[0]

    assert chat.ai_response == ""


def test_processing_and_error_blocks_recover_message_only() -> None:
    text = "\n".join(
        [
            _chat("<!-- spark-inline-chat:processing:one:betty:ask @finance -->"),
            _chat("<!-- spark-inline-chat:error:two -->", "User: ask @legal"),
        ]
    )

    processing, failed = detect_inline_chats(text)

    assert processing.user_message == "@betty ask @finance"
    assert processing.mentions is None
    assert failed.user_message == "ask @legal"
    assert failed.mentions is None
    assert (failed.start_line, failed.end_line) == (3, 5)


def test_reset_to_pending_recomputes_mentions_from_marker_message() -> None:
    text = _chat(
        "<!-- spark-inline-chat:pending:abc:betty:Ask @finance -->",
        "Earlier answer that mentions @legal",
    )

    chat = detect_inline_chats(text)[0]

    assert chat.mentions is not None
    assert [mention.value for mention in chat.mentions] == ["betty", "finance"]


def test_unclosed_opener_is_dropped() -> None:
    assert detect_inline_chats("<!-- spark-inline-chat:pending:abc -->\nUser: hello") == []


def test_orphan_closer_is_ignored() -> None:
    assert detect_inline_chats("text\n<!-- /spark-inline-chat -->\nmore") == []


def test_opener_inside_code_fence_is_not_a_chat() -> None:
    text = "```\n" + _chat("<!-- spark-inline-chat:pending:abc -->", "User: hi") + "\n```"

    assert detect_inline_chats(text) == []


def test_blocks_are_in_line_order() -> None:
    text = "\n".join(
        [
            "intro",
            _chat("<!-- spark-inline-chat:complete:first -->", "answer"),
            "middle",
            _chat("<!-- spark-inline-chat:pending:second:betty:next -->"),
        ]
    )

    chats = detect_inline_chats(text)

    assert [(chat.id, chat.start_line, chat.end_line) for chat in chats] == [("first", 2, 4), ("second", 6, 7)]


def test_pending_queries_and_position_checks() -> None:
    text = "\n".join(
        [
            _chat("<!-- spark-inline-chat:complete:done -->", "answer"),
            "between",
            _chat("<!-- spark-inline-chat:pending:todo:betty:hi -->"),
        ]
    )

    assert has_pending_inline_chats(text)
    assert [chat.id for chat in get_pending_inline_chats(text)] == ["todo"]
    assert is_inside_inline_chat(text, 2)
    assert not is_inside_inline_chat(text, 4)
    assert is_inside_inline_chat(text, 6)
    assert find_inline_chat(text, "todo") is not None
    assert find_inline_chat(text, "missing") is None
    assert not has_pending_inline_chats("no chats here")


def test_empty_marker_message_reads_body_like_legacy_marker() -> None:
    with_body = _chat("<!-- spark-inline-chat:pending:abc:betty: -->", "User: check @legal")
    without_body = _chat("<!-- spark-inline-chat:pending:abc:betty: -->")

    chat = detect_inline_chats(with_body)[0]

    assert chat.user_message == "@betty check @legal"
    assert chat.mentions is not None
    assert [mention.value for mention in chat.mentions] == ["betty", "legal"]
    assert detect_inline_chats(without_body)[0].user_message == "@betty"
