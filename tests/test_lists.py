import pytest

from editor_shortcuts.actions.lists import (
    is_numbered,
    list_prefix_of,
    next_list_prefix,
    renumber_list_prefixes,
)
from editor_shortcuts.actions.result import TextEdit, apply_changes
from editor_shortcuts.buffer import Buffer


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  - item", "  - "),
        ("1. first", "1. "),
        ("> quoted", "> "),
        ("- [ ] task", "- [ ] "),
        ("* [x] done", "* [x] "),
        ("plain text", ""),
        ("-no space", ""),
    ],
)
def test_list_prefix_of(text: str, expected: str) -> None:
    assert list_prefix_of(text) == expected


def test_is_numbered() -> None:
    assert is_numbered("12. ")
    assert not is_numbered("- ")
    assert not is_numbered("")
    assert not is_numbered(None)


@pytest.mark.parametrize(
    "text, direction, expected",
    [
        ("3. c", "after", "4. "),
        ("3. c", "before", "3. "),
        ("  * nested", "after", "* "),
        ("- [x] done", "after", "- [ ] "),
        ("- [ ] open", "after", "- [ ] "),
        ("- ", "after", None),
        ("  1. ", "before", None),
        ("text", "after", ""),
    ],
)
def test_next_list_prefix(text: str, direction: str, expected) -> None:
    assert next_list_prefix(text, direction) == expected


def test_renumber_steps_over_nested_items_and_stops_at_text() -> None:
    buffer = Buffer.from_lines("1. a", "   - nested", "2. b", "text", "3. c")

    edits = renumber_list_prefixes(buffer, 1, "")

    assert edits == [TextEdit(17, 18, "3")]
    apply_changes(buffer, edits)
    assert buffer.lines == ("1. a", "   - nested", "3. b", "text", "3. c")


def test_renumber_respects_indentation_and_multi_digit_numbers() -> None:
    buffer = Buffer.from_lines("  9. a", "  10. b", "- other")

    edits = renumber_list_prefixes(buffer, 0, "  ")
    apply_changes(buffer, edits)

    assert buffer.lines == ("  10. a", "  11. b", "- other")


def test_renumber_with_no_list_returns_nothing() -> None:
    buffer = Buffer.from_lines("plain", "1. a")

    assert renumber_list_prefixes(buffer, 0, "") == []
