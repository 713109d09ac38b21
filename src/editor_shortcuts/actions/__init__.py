"""Editing operations over a ``TextBuffer``.

Per-selection operations take ``(buffer, selection, ...)`` and return an
``EditResult``; whole-buffer operations take ``(buffer, ...)`` and return the
next list of selections.
"""

from .cursors import (
    add_cursors_to_selection_ends,
    insert_cursor_above,
    insert_cursor_below,
    select_all_occurrences,
    select_word_or_next_occurrence,
)
from .lines import (
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
from .lists import next_list_prefix, renumber_list_prefixes
from .result import BatchContext, EditResult, TextEdit, apply_changes, apply_result
from .sentence import (
    expand_sentence_selection,
    find_sentence_end,
    find_sentence_start,
    reduce_sentence_selection,
    select_sentence,
    select_to_end_of_sentence,
    select_to_start_of_sentence,
    shift_selection_to_next_sentence,
    shift_selection_to_previous_sentence,
)
from .sentence_move import move_sentence_down, move_sentence_up
from .transform import (
    Case,
    expand_selection_to_brackets,
    expand_selection_to_quotes,
    expand_selection_to_quotes_or_brackets,
    transform_case,
)

__all__ = [
    "BatchContext",
    "Case",
    "EditResult",
    "TextEdit",
    "add_cursors_to_selection_ends",
    "apply_changes",
    "apply_result",
    "copy_line",
    "delete_line",
    "delete_to_end_of_line",
    "delete_to_end_of_sentence",
    "delete_to_start_of_line",
    "delete_to_start_of_sentence",
    "expand_selection_to_brackets",
    "expand_selection_to_quotes",
    "expand_selection_to_quotes_or_brackets",
    "expand_sentence_selection",
    "find_sentence_end",
    "find_sentence_start",
    "go_to_line_boundary",
    "insert_cursor_above",
    "insert_cursor_below",
    "insert_line_above",
    "insert_line_below",
    "join_lines",
    "move_sentence_down",
    "move_sentence_up",
    "navigate_line",
    "next_list_prefix",
    "reduce_sentence_selection",
    "renumber_list_prefixes",
    "select_all_occurrences",
    "select_line",
    "select_sentence",
    "select_to_end_of_sentence",
    "select_to_start_of_sentence",
    "select_word_or_next_occurrence",
    "shift_selection_to_next_sentence",
    "shift_selection_to_previous_sentence",
    "transform_case",
]
