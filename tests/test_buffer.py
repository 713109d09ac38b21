import pytest

from editor_shortcuts.actions.result import (
    EditResult,
    TextEdit,
    apply_changes,
    apply_result,
    map_offset,
    ordered_changes,
)
from editor_shortcuts.buffer import (
    Buffer,
    BufferValidationError,
    Position,
    Selection,
)


def make_buffer(*lines: str) -> Buffer:
    return Buffer.from_lines(*lines)


def test_from_lines_exposes_lines_and_text() -> None:
    buffer = make_buffer("alpha", "beta", "")

    assert buffer.line_count() == 3
    assert buffer.last_line() == 2
    assert buffer.get_line(1) == "beta"
    assert buffer.get_value() == "alpha\nbeta\n"


def test_offsets_count_line_breaks_once() -> None:
    buffer = make_buffer("ab", "cde")

    assert buffer.pos_to_offset(Position(1, 2)) == 5
    assert buffer.offset_to_pos(3) == Position(1, 0)
    assert buffer.offset_to_pos(2) == Position(0, 2)


def test_positions_past_the_end_are_clipped() -> None:
    buffer = make_buffer("ab", "cde")

    assert buffer.pos_to_offset(Position(0, 99)) == 2
    assert buffer.pos_to_offset(Position(7, 0)) == len("ab\ncde")
    assert buffer.offset_to_pos(500) == Position(1, 3)


def test_negative_positions_raise() -> None:
    buffer = make_buffer("ab")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.pos_to_offset(Position(0, -1))
    assert excinfo.value.position == Position(0, -1)


def test_get_range_orders_its_arguments() -> None:
    buffer = make_buffer("hello", "world")

    assert buffer.get_range(Position(1, 2), Position(0, 3)) == "lo\nwo"


def test_replace_range_records_history() -> None:
    buffer = make_buffer("hello world")

    delta = buffer.replace_range("there", Position(0, 6), Position(0, 11))

    assert buffer.get_value() == "hello there"
    assert delta.removed == "world"
    assert delta.inserted == "there"
    assert buffer.history == [delta]
    assert buffer.document.version == 1


def test_insert_and_delete_helpers() -> None:
    buffer = make_buffer("ac")

    buffer.insert_text("b", Position(0, 1))
    buffer.delete_range(Position(0, 0), Position(0, 1))

    assert buffer.get_value() == "bc"
    assert [delta.label for delta in buffer.history] == ["insert_text", "delete_range"]


def test_set_selections_clips_and_requires_one() -> None:
    buffer = make_buffer("abc")

    buffer.set_selections([Selection(Position(0, 1), Position(4, 4))])

    assert buffer.list_selections() == [Selection(Position(0, 1), Position(0, 3))]
    with pytest.raises(ValueError):
        buffer.set_selections([])


def test_apply_changes_uses_pre_edit_offsets() -> None:
    buffer = make_buffer("one two three")

    apply_changes(buffer, [TextEdit(0, 3, "1"), TextEdit(8, 13, "3"), TextEdit.insert(4, ">")])

    assert buffer.get_value() == "1 >two 3"


def test_overlapping_changes_are_rejected() -> None:
    with pytest.raises(ValueError):
        ordered_changes([TextEdit(0, 4), TextEdit(2, 6, "x")])


def test_identical_changes_are_applied_once() -> None:
    assert ordered_changes([TextEdit(1, 2), TextEdit(1, 2)]) == [TextEdit(1, 2)]


def test_text_edit_rejects_inverted_ranges() -> None:
    with pytest.raises(ValueError):
        TextEdit(5, 2)


def test_map_offset_follows_earlier_edits() -> None:
    edits = ordered_changes([TextEdit(0, 2), TextEdit(10, 12, "wxyz")])

    assert map_offset(20, edits) == 20
    assert map_offset(5, edits) == 3
    assert map_offset(1, edits) == 0


def test_apply_result_resolves_offsets_after_editing() -> None:
    buffer = make_buffer("abc")
    result = EditResult(changes=(TextEdit.insert(0, "x\n"),), offsets=(2, 5))

    selection = apply_result(buffer, result)

    assert buffer.get_value() == "x\nabc"
    assert selection == Selection(Position(1, 0), Position(1, 3))
