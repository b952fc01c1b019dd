from pathlib import Path

from sparkmd.parser import ChatStatus, CommandStatus, FileParser

DOCUMENT = "\n".join(
    [
        "---",
        "title: Planning",
        "---",
        "/summarize the plan above.",
        "✅ /translate done already",
        "```",
        "/ignored inside fence",
        "```",
        "<!-- spark-inline-chat:pending:q-1:betty:What about @budget.md? -->",
        "<!-- /spark-inline-chat -->",
        "<!-- spark-inline-chat:complete:q-0 -->",
        "An earlier answer",
        "<!-- /spark-inline-chat -->",
    ]
)


def test_parse_file_composes_all_detectors() -> None:
    parser = FileParser()

    parsed = parser.parse_file("notes/plan.md", DOCUMENT)

    assert parsed.path == "notes/plan.md"
    assert parsed.frontmatter == {"title": "Planning"}
    assert [(command.command, command.line, command.status) for command in parsed.commands] == [
        ("summarize", 4, CommandStatus.PENDING),
        ("translate", 5, CommandStatus.COMPLETED),
    ]
    assert [(chat.id, chat.status) for chat in parsed.inline_chats] == [
        ("q-1", ChatStatus.PENDING),
        ("q-0", ChatStatus.COMPLETE),
    ]


def test_pending_predicates() -> None:
    parser = FileParser()
    parsed = parser.parse_file("plan.md", DOCUMENT)

    assert parser.has_pending_commands(parsed)
    assert parser.has_pending_inline_chats(parsed)
    assert [command.line for command in parser.pending_commands(parsed)] == [4]
    assert [chat.id for chat in parser.pending_inline_chats(parsed)] == ["q-1"]

    quiet = parser.parse_file("quiet.md", "# Nothing to do\n\n✅ /summarize finished")
    assert quiet.frontmatter == {}
    assert not parser.has_pending_commands(quiet)
    assert not parser.has_pending_inline_chats(quiet)


def test_parse_path_reads_document(tmp_path: Path) -> None:
    path = tmp_path / "plan.md"
    path.write_text(DOCUMENT, encoding="utf-8")

    parsed = FileParser().parse_path(path)

    assert parsed.path == str(path)
    assert len(parsed.commands) == 2
    assert len(parsed.inline_chats) == 2
