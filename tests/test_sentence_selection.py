from editor_shortcuts.actions.sentence import (
    expand_sentence_selection,
    reduce_sentence_selection,
    select_sentence,
    select_to_end_of_sentence,
    select_to_start_of_sentence,
    shift_selection_to_next_sentence,
    shift_selection_to_previous_sentence,
)
from editor_shortcuts.buffer import Buffer, Position, Selection


def make_buffer(*lines: str) -> Buffer:
    return Buffer.from_lines(*lines)


def cursor(line: int, ch: int) -> Selection:
    return Selection.cursor(Position(line, ch))


def span(start: tuple[int, int], end: tuple[int, int]) -> Selection:
    return Selection(Position(*start), Position(*end))


def test_select_sentence_at_line_start_includes_trailing_space() -> None:
    buffer = make_buffer("First sentence. Second sentence.")

    result = select_sentence(buffer, cursor(0, 0))

    assert result.selection == span((0, 0), (0, 16))
    assert not result.mutates


def test_select_sentence_is_a_fixed_point() -> None:
    buffer = make_buffer("First sentence. Second sentence.", "Third one!")
    for start in (cursor(0, 3), cursor(0, 20), cursor(1, 2)):
        first = select_sentence(buffer, start).selection
        again = select_sentence(buffer, first).selection
        assert again == first


def test_select_sentence_on_blank_line_selects_the_line() -> None:
    buffer = make_buffer("Text.", "   ", "More.")

    assert select_sentence(buffer, cursor(1, 1)).selection == span((1, 0), (2, 0))


def test_select_sentence_from_leading_whitespace() -> None:
    buffer = make_buffer("    Indented start. Next.")

    assert select_sentence(buffer, cursor(0, 2)).selection == span((0, 0), (0, 20))


def test_select_sentence_snaps_a_partial_range_outward() -> None:
    buffer = make_buffer("One. Two words here. Three.")

    result = select_sentence(buffer, span((0, 7), (0, 12)))

    assert result.selection == span((0, 5), (0, 21))


def test_expand_grows_by_one_sentence() -> None:
    buffer = make_buffer("One. Two. Three.")

    result = expand_sentence_selection(buffer, span((0, 0), (0, 5)))

    assert result.selection == span((0, 0), (0, 10))


def test_expand_crosses_into_next_line() -> None:
    buffer = make_buffer("One.", "Two. Three.")

    result = expand_sentence_selection(buffer, span((0, 0), (0, 4)))

    assert result.selection == span((0, 0), (1, 5))


def test_expand_at_document_end_is_a_noop() -> None:
    buffer = make_buffer("Only.")
    selection = span((0, 0), (0, 5))

    assert expand_sentence_selection(buffer, selection).selection == selection


def test_reduce_drops_the_last_sentence() -> None:
    buffer = make_buffer("One. Two. Three.")

    result = reduce_sentence_selection(buffer, span((0, 0), (0, 16)))

    assert result.selection == span((0, 0), (0, 10))


def test_reduce_retracts_through_blank_line_end() -> None:
    buffer = make_buffer("One.", "", "Two.")

    result = reduce_sentence_selection(buffer, span((0, 0), (2, 0)))

    assert result.selection == span((0, 0), (1, 0))


def test_reduce_single_sentence_falls_back_to_sentence_at_start() -> None:
    buffer = make_buffer("One. Two.")

    result = reduce_sentence_selection(buffer, span((0, 5), (0, 9)))

    assert result.selection == span((0, 5), (0, 9))


def test_reduce_on_cursor_is_a_noop() -> None:
    buffer = make_buffer("One.")

    assert reduce_sentence_selection(buffer, cursor(0, 2)).selection == cursor(0, 2)


def test_select_to_sentence_edges_keep_anchor_at_head() -> None:
    buffer = make_buffer("One. Two words. Three.")

    assert select_to_end_of_sentence(buffer, cursor(0, 8)).selection == span((0, 8), (0, 16))
    assert select_to_start_of_sentence(buffer, cursor(0, 8)).selection == span((0, 8), (0, 5))


def test_shift_to_next_sentence_on_same_line() -> None:
    buffer = make_buffer("One. Two. Three.")

    result = shift_selection_to_next_sentence(buffer, span((0, 0), (0, 5)))

    assert result.selection == span((0, 5), (0, 10))


def test_shift_to_next_sentence_skips_blank_lines() -> None:
    buffer = make_buffer("One.", "", "  ", "  Two.")

    result = shift_selection_to_next_sentence(buffer, span((0, 0), (0, 4)))

    assert result.selection == span((3, 0), (3, 6))


def test_shift_to_next_sentence_at_document_end_is_a_noop() -> None:
    buffer = make_buffer("One.", "")
    selection = span((0, 0), (0, 4))

    assert shift_selection_to_next_sentence(buffer, selection).selection == selection


def test_shift_to_previous_sentence_on_same_line() -> None:
    buffer = make_buffer('One. "Two!" Three.')

    result = shift_selection_to_previous_sentence(buffer, span((0, 12), (0, 18)))

    assert result.selection == span((0, 5), (0, 12))


def test_shift_to_previous_sentence_crosses_blank_lines() -> None:
    buffer = make_buffer("Alpha. Beta.", "", "Gamma.")

    result = shift_selection_to_previous_sentence(buffer, span((2, 0), (2, 6)))

    assert result.selection == span((0, 7), (0, 12))


def test_shift_to_previous_sentence_at_document_start_is_a_noop() -> None:
    buffer = make_buffer("One. Two.")
    selection = span((0, 0), (0, 5))

    assert shift_selection_to_previous_sentence(buffer, selection).selection == selection


def test_select_sentence_on_trailing_blank_line_stays_in_document() -> None:
    buffer = Buffer.from_text("One. Two.\n")

    first = select_sentence(buffer, cursor(1, 0)).selection

    assert first == cursor(1, 0)
    assert select_sentence(buffer, first).selection == first
    assert shift_selection_to_next_sentence(buffer, first).selection == first
    assert expand_sentence_selection(buffer, first).selection == first


def test_expand_into_trailing_blank_line_stops_at_document_end() -> None:
    buffer = Buffer.from_text("One.\n")

    grown = expand_sentence_selection(buffer, span((0, 0), (0, 4))).selection

    assert grown == span((0, 0), (1, 0))
    assert expand_sentence_selection(buffer, grown).selection == grown
    assert select_sentence(buffer, grown).selection == grown
