"""
Tests for grouping edits into hunks.
"""

import unittest

from editscript.diff_utils.core import Edit, EditOrderError, PatchApplicationError
from editscript.diff_utils.rendering import (
    AssemblerState, EditCursor, Hunk, HunkAssembler, SourceLine,
    assemble_hunks, iter_text_lines, render, touches
)

LETTERS = "a\nb\nc\nd\ne\nf\ng\nh\n"


class TestTouches(unittest.TestCase):
    """Test cases for deciding whether an edit affects a line."""

    def setUp(self):
        self.line = SourceLine("abc\n", 10, 3)

    def test_insertions(self):
        self.assertTrue(touches(Edit(10, 0, "x"), self.line))
        self.assertTrue(touches(Edit(13, 0, "x"), self.line))
        self.assertFalse(touches(Edit(14, 0, "x"), self.line))

    def test_replacements(self):
        self.assertTrue(touches(Edit(8, 3, ""), self.line))
        self.assertTrue(touches(Edit(13, 5, ""), self.line))
        self.assertFalse(touches(Edit(6, 4, ""), self.line))
        self.assertFalse(touches(Edit(14, 1, ""), self.line))

    def test_no_edit(self):
        self.assertFalse(touches(None, self.line))


class TestHunkAssembler(unittest.TestCase):
    """Test cases for the hunk state machine."""

    def feed_all(self, assembler, text):
        hunks = []
        for line in iter_text_lines(text):
            hunk = assembler.feed(line)
            if hunk is not None:
                hunks.append(hunk)
        return hunks

    def test_state_transitions(self):
        """Test the states visited while a single deletion is processed."""
        assembler = HunkAssembler(EditCursor([Edit(4, 2, "")]), context_lines=1)
        lines = list(iter_text_lines(LETTERS))
        states = []
        closed = []
        for line in lines[:5]:
            closed.append(assembler.feed(line))
            states.append(assembler.state)

        self.assertEqual(states, [
            AssemblerState.NOT_STARTED,
            AssemblerState.NOT_STARTED,
            AssemblerState.PENDING_CLOSE,
            AssemblerState.PENDING_CLOSE,
            AssemblerState.NOT_STARTED,
        ])
        hunk = closed[-1]
        self.assertEqual(hunk.start_line, 2)
        self.assertEqual(hunk.start_offset, 2)
        self.assertEqual(hunk.lines, ["b\n", "c\n", "d\n"])
        self.assertEqual(hunk.edits, [Edit(2, 2, "")])
        self.assertEqual(hunk.absolute_edits(), [Edit(4, 2, "")])
        self.assertEqual(hunk.changed, [False, True, False])
        self.assertEqual(list(assembler.window), ["e\n"])

    def test_multi_line_edit_accumulates(self):
        """Test that an edit spanning lines keeps the hunk open."""
        assembler = HunkAssembler(EditCursor([Edit(4, 4, "X\n")]), context_lines=1)
        lines = list(iter_text_lines(LETTERS))
        for line in lines[:3]:
            assembler.feed(line)
        self.assertEqual(assembler.state, AssemblerState.ACCUMULATING)
        assembler.feed(lines[3])
        self.assertEqual(assembler.state, AssemblerState.PENDING_CLOSE)

    def test_insertion_at_line_start_counts_as_context(self):
        assembler = HunkAssembler(EditCursor([Edit(4, 0, "x\n")]), context_lines=1)
        hunks = self.feed_all(assembler, LETTERS)
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].lines, ["b\n", "c\n"])
        self.assertEqual(hunks[0].changed, [False, False])

    def test_partial_insertion_at_line_start_changes_the_line(self):
        """Test that text inserted without a newline rewrites the line it precedes."""
        hunks = assemble_hunks([Edit(1, 0, "aa")], iter_text_lines("\nx\n\nabx\n"), 1)
        self.assertEqual(hunks[0].changed, [False, True, False])
        self.assertEqual(render("f", hunks), "--- f\n+++ f\n@@ -1,3 +1,3 @@\n \n-x\n+aax\n \n")

    def test_edit_ending_without_newline_changes_next_line(self):
        """Test that a replacement dropping a line's newline joins it to the next line."""
        assembler = HunkAssembler(EditCursor([Edit(3, 2, "\nb")]), context_lines=1)
        lines = list(iter_text_lines("\nx\nq\ny\n\n"))
        for line in lines[:3]:
            assembler.feed(line)
        self.assertEqual(assembler.state, AssemblerState.ACCUMULATING)
        for line in lines[3:]:
            assembler.feed(line)

        hunk = assembler.finish()
        self.assertEqual(hunk.changed, [False, True, True, False])
        self.assertEqual(render("f", [hunk]), "--- f\n+++ f\n@@ -2,4 +2,4 @@\n x\n-q\n-y\n+\n+by\n \n")

    def test_deleted_line_leaves_next_line_intact(self):
        hunks = assemble_hunks([Edit(4, 2, "")], iter_text_lines(LETTERS), 1)
        self.assertEqual(hunks[0].changed, [False, True, False])

    def test_text_appended_to_last_line_without_newline(self):
        for context_lines in (0, 1):
            hunks = assemble_hunks([Edit(3, 0, "c\n")], iter_text_lines("a\nb"), context_lines)
            self.assertEqual(render("f", hunks), (
                "--- f\n+++ f\n@@ -2,1 +2,1 @@\n-b\n\\ No newline at end of file\n+bc\n"
            ))

    def test_negative_context_is_clamped(self):
        assembler = HunkAssembler(EditCursor([]), context_lines=-2)
        self.assertEqual(assembler.context_lines, 0)
        hunks = assemble_hunks([Edit(2, 1, "B")], iter_text_lines(LETTERS), -1)
        self.assertEqual(render("f", hunks), "--- f\n+++ f\n@@ -2,1 +2,1 @@\n-b\n+B\n")

    def test_edit_before_current_line(self):
        assembler = HunkAssembler(EditCursor([Edit(0, 1, "x")]), context_lines=1)
        with self.assertRaises(EditOrderError):
            assembler.feed(SourceLine("b\n", 2, 2))

    def test_overlapping_edits(self):
        with self.assertRaises(EditOrderError) as cm:
            assemble_hunks([Edit(0, 3, ""), Edit(2, 1, "x")], iter_text_lines("ab\ncd\n"), 1)
        self.assertEqual(cm.exception.details["previous_end"], 3)

    def test_edit_past_end_of_text(self):
        with self.assertRaises(PatchApplicationError):
            assemble_hunks([Edit(5, 1, "")], iter_text_lines("a\n"), 1)

    def test_edit_running_off_end_of_text(self):
        with self.assertRaises(PatchApplicationError):
            assemble_hunks([Edit(1, 5, "")], iter_text_lines("a\n"), 1)

    def test_insertion_at_end_of_text(self):
        """Test that text appended after the last line gets a hunk."""
        hunks = assemble_hunks([Edit(4, 0, "c\n")], iter_text_lines("a\nb\n"), 1)
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].start_line, 2)
        self.assertEqual(hunks[0].lines, ["b\n"])
        self.assertEqual(render("f", hunks), "--- f\n+++ f\n@@ -2,1 +2,2 @@\n b\n+c\n")

    def test_zero_context(self):
        hunks = assemble_hunks([Edit(2, 0, "x\n")], iter_text_lines("a\nb\n"), 0)
        self.assertEqual(len(hunks), 1)
        self.assertEqual(hunks[0].lines, [])
        self.assertEqual(render("f", hunks), "--- f\n+++ f\n@@ -1,0 +2,1 @@\n+x\n")

    def test_no_edits(self):
        self.assertEqual(assemble_hunks([], iter_text_lines(LETTERS), 3), [])

    def test_context_does_not_overlap(self):
        """Test that lines trimmed from one hunk become context of the next."""
        edits = [Edit(0, 1, "A"), Edit(14, 1, "H")]
        hunks = assemble_hunks(edits, iter_text_lines(LETTERS), 2)
        self.assertEqual([h.lines for h in hunks], [
            ["a\n", "b\n", "c\n"],
            ["f\n", "g\n", "h\n"],
        ])


class TestHunk(unittest.TestCase):
    """Test cases for the Hunk data class."""

    def test_trim_trailing(self):
        hunk = Hunk(0, 1, ["a\n", "b\n", "c\n"])
        self.assertEqual(hunk.trim_trailing(2), ["b\n", "c\n"])
        self.assertEqual(hunk.trim_trailing(0), [])
        self.assertEqual(hunk.num_lines, 1)

    def test_describe(self):
        hunk = Hunk(4, 3, ["c\n"])
        hunk.add_edit(Edit(4, 1, "C"))
        self.assertIn("Line: 3", hunk.describe())
        self.assertIn("0:1 -> 'C'", hunk.describe())


if __name__ == "__main__":
    unittest.main()
