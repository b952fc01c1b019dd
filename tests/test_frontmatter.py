from sparkmd.parser.frontmatter import FrontmatterChange, FrontmatterTracker, extract_frontmatter, strip_frontmatter


def test_extract_frontmatter_mapping() -> None:
    text = "---\ntitle: Weekly notes\ntags:\n  - work\n  - planning\ndraft: true\n---\n/summarize this\n"

    assert extract_frontmatter(text) == {"title": "Weekly notes", "tags": ["work", "planning"], "draft": True}
    assert strip_frontmatter(text) == "/summarize this\n"


def test_missing_frontmatter_is_empty() -> None:
    assert extract_frontmatter("# Heading\n\ntext") == {}
    assert extract_frontmatter("") == {}
    assert strip_frontmatter("# Heading") == "# Heading"


def test_malformed_frontmatter_is_empty() -> None:
    assert extract_frontmatter("---\ntitle: [unclosed\n---\nbody") == {}
    assert extract_frontmatter("---\n- just\n- a list\n---\nbody") == {}
    assert extract_frontmatter("---\ntitle: no closing delimiter\nbody") == {}


def test_byte_order_mark_is_ignored() -> None:
    assert extract_frontmatter("\ufeff---\ntitle: x\n---\n") == {"title": "x"}


def test_tracker_reports_added_changed_and_removed_fields() -> None:
    tracker = FrontmatterTracker()

    first = tracker.detect_changes("a.md", "---\nstatus: draft\nowner: sam\n---\n")
    assert first == [
        FrontmatterChange(field="status", old_value=None, new_value="draft"),
        FrontmatterChange(field="owner", old_value=None, new_value="sam"),
    ]

    assert tracker.detect_changes("a.md", "---\nstatus: draft\nowner: sam\n---\n") == []

    changes = tracker.detect_changes("a.md", "---\nstatus: review\n---\n")
    assert changes == [
        FrontmatterChange(field="status", old_value="draft", new_value="review"),
        FrontmatterChange(field="owner", old_value="sam", new_value=None),
    ]


def test_tracker_state_is_per_instance_and_clearable() -> None:
    tracker = FrontmatterTracker()
    tracker.detect_changes("a.md", "---\nstatus: draft\n---\n")

    assert FrontmatterTracker().detect_changes("a.md", "---\nstatus: draft\n---\n") != []

    tracker.clear("a.md")
    assert tracker.detect_changes("a.md", "---\nstatus: draft\n---\n") != []
