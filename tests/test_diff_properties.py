"""
Property tests for edit scripts: round trip, minimality and idempotence.
"""

import pytest

from editscript.diff_utils import diff, diff_chars, diff_lines
from editscript.diff_utils.core.utils import join_units


def lcs_length(a, b):
    """Length of the longest common subsequence, by dynamic programming."""
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) - 1, -1, -1):
        for j in range(len(b) - 1, -1, -1):
            if a[i] == b[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])
    return table[0][0]


def test_round_trip_random_sequences(make_lines):
    for _ in range(300):
        a = make_lines()
        b = make_lines()
        result = diff(a, b, "f")
        assert result.apply_to_string("f", join_units(a)) == join_units(b), (a, b)


def test_edit_count_is_minimal(make_lines):
    for _ in range(300):
        a = make_lines()
        b = make_lines()
        if not a or not b:
            continue
        edits = diff(a, b, "f").edits_for("f")
        assert len(edits) == len(a) + len(b) - 2 * lcs_length(a, b), (a, b)


def test_every_edit_is_a_single_unit(make_lines):
    for _ in range(100):
        a = make_lines()
        b = make_lines()
        if not a or not b:
            continue
        for edit in diff(a, b, "f").edits_for("f"):
            if edit.length == 0:
                assert edit.replacement in b
            else:
                assert edit.replacement == ""
                assert edit.length in {len(unit) for unit in a}


def test_edits_are_sorted(make_lines):
    for _ in range(100):
        edits = diff(make_lines(), make_lines(), "f").edits_for("f")
        offsets = [e.offset for e in edits]
        assert offsets == sorted(offsets)


def test_diff_of_identical_sequences_is_empty(make_lines):
    for _ in range(50):
        a = make_lines()
        assert len(diff(a, list(a), "f")) == 0


def test_diff_against_empty_original_is_single_insertion():
    result = diff([], ["x\n", "y\n"], "f")
    edits = result.edits()["f"]
    assert len(edits) == 1
    assert (edits[0].offset, edits[0].length, edits[0].replacement) == (0, 0, "x\ny\n")


def test_diff_against_empty_target_is_single_deletion():
    result = diff(["x\n", "yy\n"], [], "f")
    edits = result.edits()["f"]
    assert len(edits) == 1
    assert (edits[0].offset, edits[0].length, edits[0].replacement) == (0, 5, "")


def test_diff_of_two_empty_sequences():
    assert diff([], [], "f").edits() == {}


@pytest.mark.parametrize("original,target", [
    ("kitten", "sitting"),
    ("", "abc"),
    ("abc", ""),
    ("same", "same"),
    ("héllo wörld", "hello world"),
])
def test_character_diff_round_trip(original, target):
    result = diff_chars("f", original, target)
    assert result.apply_to_string("f", original) == target


def test_line_diff_keeps_carriage_returns_inside_lines():
    original = "one\r\ntwo\r\nthree\r\n"
    target = "one\r\n2\r\nthree\r\n"
    result = diff_lines("f", original, target)
    assert len(result) == 2
    assert result.apply_to_string("f", original) == target
