import pytest

from editor_shortcuts.actions.lines import (
    copy_line,
    delete_line,
    delete_to_end_of_line,
    delete_to_end_of_sentence,
    delete_to_start_of_line,
    delete_to_start_of_sentence,
    go_to_line_boundary,
    insert_line_above,
    insert_line_below,
    join_lines,
    navigate_line,
    select_line,
)
from editor_shortcuts.actions.result import BatchContext, apply_changes, apply_result
from editor_shortcuts.buffer import Buffer, Position, Selection
from editor_shortcuts.settings import Settings


def make_buffer(*lines: str) -> Buffer:
    return Buffer.from_lines(*lines)


def cursor(line: int, ch: int) -> Selection:
    return Selection.cursor(Position(line, ch))


def span(start: tuple[int, int], end: tuple[int, int]) -> Selection:
    return Selection(Position(*start), Position(*end))


def make_context(**settings) -> BatchContext:
    return BatchContext(settings=Settings(**settings))


def test_insert_line_below_keeps_indentation() -> None:
    buffer = make_buffer("  text")

    selection = apply_result(buffer, insert_line_below(buffer, cursor(0, 2), make_context()))

    assert buffer.lines == ("  text", "  ")
    assert selection == cursor(1, 2)


def test_insert_line_below_continues_and_renumbers_a_numbered_list() -> None:
    buffer = make_buffer("1. one", "2. two")

    selection = apply_result(buffer, insert_line_below(buffer, cursor(0, 4), make_context()))

    assert buffer.lines == ("1. one", "2. ", "3. two")
    assert selection == cursor(1, 3)


def test_insert_line_below_empty_item_ends_the_list() -> None:
    buffer = make_buffer("- ")

    selection = apply_result(buffer, insert_line_below(buffer, cursor(0, 2), make_context()))

    assert buffer.lines == ("",)
    assert selection == cursor(0, 0)


def test_insert_line_below_checked_task_starts_an_open_task() -> None:
    buffer = make_buffer("- [x] done")

    selection = apply_result(buffer, insert_line_below(buffer, cursor(0, 3), make_context()))

    assert buffer.lines == ("- [x] done", "- [ ] ")
    assert selection == cursor(1, 6)


def test_insert_line_below_without_list_prefix_setting() -> None:
    buffer = make_buffer("- item")

    context = make_context(auto_insert_list_prefix=False)
    selection = apply_result(buffer, insert_line_below(buffer, cursor(0, 3), context))

    assert buffer.lines == ("- item", "")
    assert selection == cursor(1, 0)


def test_insert_line_above_plain_line() -> None:
    buffer = make_buffer("first", "second")

    selection = apply_result(buffer, insert_line_above(buffer, cursor(1, 3), make_context()))

    assert buffer.lines == ("first", "", "second")
    assert selection == cursor(1, 0)


def test_insert_line_above_numbered_item_renumbers_the_rest() -> None:
    buffer = make_buffer("1. a", "2. b")

    selection = apply_result(buffer, insert_line_above(buffer, cursor(1, 2), make_context()))

    assert buffer.lines == ("1. a", "2. ", "3. b")
    assert selection == cursor(1, 3)


def test_insert_line_above_first_line_has_no_prefix() -> None:
    buffer = make_buffer("- item")

    selection = apply_result(buffer, insert_line_above(buffer, cursor(0, 0), make_context()))

    assert buffer.lines == ("", "- item")
    assert selection == cursor(0, 0)


def test_delete_line_pulls_up_following_line() -> None:
    buffer = make_buffer("a", "b", "c")

    selection = apply_result(buffer, delete_line(buffer, cursor(1, 1), make_context()))

    assert buffer.lines == ("a", "c")
    assert selection == cursor(1, 1)


def test_delete_last_line_takes_preceding_newline() -> None:
    buffer = make_buffer("a", "b")

    selection = apply_result(buffer, delete_line(buffer, cursor(1, 1), make_context()))

    assert buffer.lines == ("a",)
    assert selection == cursor(0, 1)


def test_delete_only_line_leaves_empty_document() -> None:
    buffer = make_buffer("solo")

    apply_result(buffer, delete_line(buffer, cursor(0, 2), make_context()))

    assert buffer.lines == ("",)


def test_delete_line_range_ending_at_column_zero_keeps_that_line() -> None:
    buffer = make_buffer("a", "b", "c")

    selection = apply_result(buffer, delete_line(buffer, span((0, 0), (1, 0)), make_context()))

    assert buffer.lines == ("b", "c")
    assert selection == cursor(0, 0)


def test_delete_line_batch_tracks_lines_already_deleted() -> None:
    buffer = make_buffer("a", "b", "c", "d")
    context = make_context()

    first = delete_line(buffer, cursor(0, 0), context)
    context.iteration = 1
    second = delete_line(buffer, cursor(2, 0), context)
    apply_changes(buffer, first.changes + second.changes)

    assert buffer.lines == ("b", "d")
    assert first.selection == cursor(0, 0)
    assert second.selection == cursor(1, 0)
    assert context.lines_deleted == 2


def test_delete_line_resets_counter_on_first_iteration() -> None:
    buffer = make_buffer("a", "b", "c")
    context = make_context()
    context.lines_deleted = 5

    result = delete_line(buffer, cursor(1, 0), context)

    assert result.selection == cursor(1, 0)
    assert context.lines_deleted == 1


def test_join_lines_inserts_single_space() -> None:
    buffer = make_buffer("one", "two")

    selection = apply_result(buffer, join_lines(buffer, cursor(0, 1)))

    assert buffer.lines == ("one two",)
    assert selection == cursor(0, 3)


def test_join_lines_drops_list_marker_and_existing_space() -> None:
    buffer = make_buffer("- a ", "- b")

    selection = apply_result(buffer, join_lines(buffer, cursor(0, 0)))

    assert buffer.lines == ("- a b",)
    assert selection == cursor(0, 4)


def test_join_lines_with_empty_following_line() -> None:
    buffer = make_buffer("one", "")

    apply_result(buffer, join_lines(buffer, cursor(0, 0)))

    assert buffer.lines == ("one",)


def test_join_lines_on_last_line_is_a_noop() -> None:
    buffer = make_buffer("only")

    result = join_lines(buffer, cursor(0, 1))

    assert not result.mutates
    assert result.selection == cursor(0, 4)


def test_join_lines_over_a_range_keeps_it_selected() -> None:
    buffer = make_buffer("a", "b", "c")

    selection = apply_result(buffer, join_lines(buffer, span((0, 0), (2, 1))))

    assert buffer.lines == ("a b c",)
    assert selection == span((0, 0), (0, 5))


def test_copy_line_up_keeps_selection() -> None:
    buffer = make_buffer("a", "b")

    selection = apply_result(buffer, copy_line(buffer, cursor(0, 1), "up"))

    assert buffer.lines == ("a", "a", "b")
    assert selection == cursor(0, 1)


def test_copy_line_down_moves_selection_to_copy() -> None:
    buffer = make_buffer("a", "b", "c")

    selection = apply_result(buffer, copy_line(buffer, span((0, 0), (1, 1)), "down"))

    assert buffer.lines == ("a", "b", "a", "b", "c")
    assert selection == span((2, 0), (3, 1))


def test_delete_to_start_of_line() -> None:
    buffer = make_buffer("hello world")

    selection = apply_result(buffer, delete_to_start_of_line(buffer, cursor(0, 6)))

    assert buffer.lines == ("world",)
    assert selection == cursor(0, 0)


def test_delete_to_start_of_line_at_line_start_joins_previous() -> None:
    buffer = make_buffer("a", "b")

    selection = apply_result(buffer, delete_to_start_of_line(buffer, cursor(1, 0)))

    assert buffer.lines == ("ab",)
    assert selection == cursor(0, 1)
    assert not delete_to_start_of_line(buffer, cursor(0, 0)).mutates


def test_delete_to_end_of_line() -> None:
    buffer = make_buffer("hello world", "next")

    apply_result(buffer, delete_to_end_of_line(buffer, cursor(0, 5)))
    assert buffer.lines == ("hello", "next")

    apply_result(buffer, delete_to_end_of_line(buffer, cursor(0, 5)))
    assert buffer.lines == ("hellonext",)

    assert not delete_to_end_of_line(buffer, cursor(0, 9)).mutates


def test_delete_to_end_of_sentence_stops_after_terminator() -> None:
    buffer = make_buffer("One two. Three.")

    selection = apply_result(buffer, delete_to_end_of_sentence(buffer, cursor(0, 4)))

    assert buffer.lines == ("One  Three.",)
    assert selection == cursor(0, 4)


def test_delete_to_end_of_sentence_falls_back_to_line_end() -> None:
    buffer = make_buffer("no end here", "x")

    apply_result(buffer, delete_to_end_of_sentence(buffer, cursor(0, 3)))
    assert buffer.lines == ("no ", "x")

    apply_result(buffer, delete_to_end_of_sentence(buffer, cursor(0, 3)))
    assert buffer.lines == ("no x",)


def test_delete_to_start_of_sentence() -> None:
    buffer = make_buffer("One. Two three")

    selection = apply_result(buffer, delete_to_start_of_sentence(buffer, cursor(0, 9)))

    assert buffer.lines == ("One. three",)
    assert selection == cursor(0, 5)


def test_delete_to_start_of_sentence_without_terminator() -> None:
    buffer = make_buffer("a", "Hello there")

    apply_result(buffer, delete_to_start_of_sentence(buffer, cursor(1, 5)))
    assert buffer.lines == ("a", " there")

    selection = apply_result(buffer, delete_to_start_of_sentence(buffer, cursor(1, 0)))
    assert buffer.lines == ("a there",)
    assert selection == cursor(0, 1)

    assert not delete_to_start_of_sentence(buffer, cursor(0, 0)).mutates


def test_select_line() -> None:
    buffer = make_buffer("a", "b")

    assert select_line(buffer, cursor(0, 0)).selection == span((0, 0), (1, 0))
    assert select_line(buffer, cursor(1, 0)).selection == span((1, 0), (1, 1))


def test_go_to_line_boundary() -> None:
    buffer = make_buffer("  text")
    selection = span((0, 2), (0, 4))

    assert go_to_line_boundary(buffer, selection, "start").selection == cursor(0, 0)
    assert go_to_line_boundary(buffer, selection, "end").selection == cursor(0, 6)


@pytest.mark.parametrize(
    "target, expected",
    [
        ("prev", (0, 5)),
        ("next", (1, 2)),
        ("first", (0, 0)),
        ("last", (2, 3)),
    ],
)
def test_navigate_line(target: str, expected: tuple[int, int]) -> None:
    buffer = make_buffer("long line", "ab", "xyz")

    assert navigate_line(buffer, cursor(0, 5), target).selection == cursor(*expected)


def test_navigate_line_rejects_unknown_target() -> None:
    with pytest.raises(ValueError):
        navigate_line(make_buffer("a"), cursor(0, 0), "sideways")
