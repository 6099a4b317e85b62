"""
Grouping of edits into unified diff hunks.

The original text is streamed one line at a time. Edits are attached to the
hunk covering the lines they touch, and every hunk carries up to
``context_lines`` lines of leading and trailing context. Two changes separated
by fewer than ``2 * context_lines`` unchanged lines share a hunk; otherwise
they land in separate hunks.

The assembler is a small state machine fed by any iterable of SourceLine
values and an EditCursor, so it does not depend on where the text comes from.
"""

import collections
import enum
from dataclasses import dataclass
from typing import Deque, IO, Iterable, Iterator, List, Optional, Sequence

from editscript.utils.logging_utils import logger
from ..application.edit_apply import apply_edits_to_string
from ..core.config import get_context_lines
from ..core.edit_set import Edit
from ..core.exceptions import EditOrderError, PatchApplicationError
from ..core.utils import split_lines
from .hunk import Hunk


@dataclass(frozen=True)
class SourceLine:
    """One line of the original text with its 0-based offset and 1-based number."""
    text: str
    offset: int
    number: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


def iter_stream_lines(in_stream: IO[str]) -> Iterator[SourceLine]:
    """
    Read lines from a text stream.

    The stream must not translate line endings, otherwise offsets drift from
    the ones the edits were computed against.
    """
    offset = 0
    number = 0
    while True:
        text = in_stream.readline()
        if not text:
            break
        number += 1
        yield SourceLine(text, offset, number)
        offset += len(text)


def iter_text_lines(text: str) -> Iterator[SourceLine]:
    """Split a string into SourceLine values."""
    offset = 0
    for number, line in enumerate(split_lines(text), start=1):
        yield SourceLine(line, offset, number)
        offset += len(line)


class EditCursor:
    """Marks the next edit to be consumed from a sorted list."""

    def __init__(self, edits: Sequence[Edit]):
        self._edits = list(edits)
        self._index = 0

    @property
    def current(self) -> Optional[Edit]:
        if self._index >= len(self._edits):
            return None
        return self._edits[self._index]

    def advance(self) -> None:
        self._index += 1

    def remaining(self) -> List[Edit]:
        return self._edits[self._index:]


def touches(edit: Optional[Edit], line: SourceLine) -> bool:
    """Check if an edit inserts into, changes or deletes part of a line."""
    if edit is None:
        return False
    if edit.is_insertion:
        return line.offset <= edit.offset < line.end
    return edit.offset < line.end and edit.end > line.offset


class AssemblerState(enum.Enum):
    """States of the hunk assembler."""
    NOT_STARTED = "not_started"      # no hunk open
    ACCUMULATING = "accumulating"    # the edits run into the next line
    PENDING_CLOSE = "pending_close"  # collecting trailing context


class HunkAssembler:
    """
    State machine turning a stream of lines and sorted edits into hunks.

    Call ``feed`` once per line in order; it returns a hunk whenever one is
    complete. Call ``finish`` after the last line to flush the open hunk.

    A line counts as unchanged only if it reads the same in the edited text:
    insertions at its start must end in a newline, and the text before it must
    still end in one. A hunk closes after ``2 * context_lines`` unchanged lines,
    and everything past the first ``context_lines`` of them is handed back as
    leading context for the next hunk instead of staying in the closed one.
    """

    def __init__(self, cursor: EditCursor, context_lines: Optional[int] = None):
        self.cursor = cursor
        self.context_lines = max(0, get_context_lines() if context_lines is None else context_lines)
        self.state = AssemblerState.NOT_STARTED
        self.hunk: Optional[Hunk] = None
        self.window: Deque[str] = collections.deque(maxlen=self.context_lines)
        self.trailing = 0
        self._reach = 0
        self._text_end = 0
        self._lines_read = 0
        self._last_text: Optional[str] = None

    def feed(self, line: SourceLine) -> Optional[Hunk]:
        """Process the next line of the original text."""
        pending = self.cursor.current
        if pending is not None and pending.offset < line.offset:
            logger.error(f"Edit {pending} precedes line {line.number} at offset {line.offset}")
            raise EditOrderError(
                "Edit lies before the current position of the original text",
                {"offset": pending.offset, "line": line.number, "line_offset": line.offset}
            )

        if self.state is AssemblerState.NOT_STARTED:
            if touches(pending, line):
                self._open(line)
                self._absorb(line, continued=False)
            else:
                self.window.append(line.text)
        elif self.state is AssemblerState.ACCUMULATING:
            self._absorb(line, continued=True)
        elif touches(pending, line):
            self._absorb(line, continued=False)
        else:
            self.hunk.add_line(line.text)
            self.trailing += 1

        self._text_end = line.end
        self._lines_read = line.number
        self._last_text = line.text

        # A line without a newline is the last one; finish() may still change it
        if (self.state is AssemblerState.PENDING_CLOSE and line.text.endswith('\n') and
                self.trailing >= 2 * self.context_lines):
            return self._close()
        return None

    def finish(self) -> Optional[Hunk]:
        """Flush the open hunk after the last line has been fed."""
        if self._reach > self._text_end:
            raise PatchApplicationError(
                "Edit extends past the end of the original text",
                {"type": "range", "end": self._reach, "text_length": self._text_end}
            )

        # Insertions at the very end of the text follow the last line
        appended = False
        while self.cursor.current is not None:
            edit = self.cursor.current
            if not (edit.is_insertion and edit.offset == self._text_end):
                raise PatchApplicationError(
                    "Edit lies past the end of the original text",
                    {"type": "range", "offset": edit.offset, "length": edit.length,
                     "text_length": self._text_end}
                )
            if self.state is AssemblerState.NOT_STARTED:
                self._open_at_end()
            self.hunk.add_edit(edit)
            self.cursor.advance()
            self.state = AssemblerState.PENDING_CLOSE
            self.trailing = 0
            appended = True

        # Text appended to a last line without a newline joins that line
        if appended and self.hunk.lines and not self._last_text.endswith('\n'):
            self.hunk.changed[-1] = True

        if self.state is AssemblerState.NOT_STARTED:
            return None
        return self._close()

    def _open(self, line: SourceLine) -> None:
        leading = list(self.window)
        self.window.clear()
        start_offset = line.offset - sum(len(text) for text in leading)
        self.hunk = Hunk(start_offset, line.number - len(leading), leading,
                         context_lines=self.context_lines)
        logger.debug(f"Opened hunk at line {self.hunk.start_line} with {len(leading)} leading context lines")

    def _open_at_end(self) -> None:
        leading = list(self.window)
        self.window.clear()
        if not leading and self._last_text is not None and not self._last_text.endswith('\n'):
            leading = [self._last_text]
        start_offset = self._text_end - sum(len(text) for text in leading)
        self.hunk = Hunk(start_offset, self._lines_read + 1 - len(leading), leading,
                         context_lines=self.context_lines)
        logger.debug(f"Opened hunk at end of text, line {self.hunk.start_line}")

    def _absorb(self, line: SourceLine, continued: bool) -> None:
        """
        Attach every pending edit touching ``line``, add the line and pick the next state.

        ``continued`` is set when the previous line's edits already run into
        this line, which makes it changed regardless of its own edits.
        """
        attached = []
        while touches(self.cursor.current, line):
            edit = self.cursor.current
            if edit.offset < self._reach:
                logger.error(f"Edit {edit} overlaps an edit ending at {self._reach}")
                raise EditOrderError(
                    "Edits overlap",
                    {"offset": edit.offset, "length": edit.length, "previous_end": self._reach}
                )
            self.hunk.add_edit(edit)
            self._reach = max(self._reach, edit.end)
            attached.append(edit)
            self.cursor.advance()

        # Whole lines inserted before a line leave the line itself unchanged
        intact = (not continued and
                  all(edit.is_insertion and edit.offset == line.offset for edit in attached) and
                  ''.join(edit.replacement for edit in attached).endswith('\n'))
        self.hunk.add_line(line.text, changed=not intact)

        if self._reach > line.end or (self._reach == line.end and not self._ends_on_line_break()):
            self.state = AssemblerState.ACCUMULATING
            return

        self.trailing = 1 if intact else 0
        self.state = AssemblerState.PENDING_CLOSE

    def _ends_on_line_break(self) -> bool:
        """Check if the edited text of the hunk so far ends where a line ends."""
        edited = apply_edits_to_string(self.hunk.edits, self.hunk.original_text)
        return not edited or edited.endswith('\n')

    def _close(self) -> Hunk:
        excess = self.trailing - self.context_lines
        self.window.extend(self.hunk.trim_trailing(excess))
        hunk = self.hunk
        self.hunk = None
        self.trailing = 0
        self.state = AssemblerState.NOT_STARTED
        logger.debug(f"Closed hunk at line {hunk.start_line} spanning {hunk.num_lines} lines")
        return hunk


def assemble_hunks(edits: Sequence[Edit], lines: Iterable[SourceLine],
                   context_lines: Optional[int] = None) -> List[Hunk]:
    """
    Group the sorted edits of one file into hunks.

    Args:
        edits: Edits of one file, sorted by offset and non-overlapping
        lines: The lines of the original text, in order
        context_lines: Lines of context around each hunk (configured default if None)

    Returns:
        The hunks in file order
    """
    if not edits:
        return []

    assembler = HunkAssembler(EditCursor(edits), context_lines)
    hunks = []
    for line in lines:
        hunk = assembler.feed(line)
        if hunk is not None:
            hunks.append(hunk)
    hunk = assembler.finish()
    if hunk is not None:
        hunks.append(hunk)

    logger.debug(f"Assembled {len(edits)} edits into {len(hunks)} hunks")
    return hunks
