"""
Hunks: contiguous regions of a file holding edits plus surrounding context.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.edit_set import Edit


@dataclass
class Hunk:
    """
    A region of the original file and the edits that fall inside it.

    Attributes:
        start_offset: Offset of the first line of the hunk in the original file
        start_line: 1-based number of the first line of the hunk
        lines: The original lines covered by the hunk, including context
        edits: Edits with offsets relative to ``start_offset``
        changed: One flag per line; False for lines that appear unchanged in the
            edited text (context), True for lines the edits rewrite
        context_lines: Context kept around the changes when rendering (None keeps all)
    """
    start_offset: int
    start_line: int
    lines: List[str] = field(default_factory=list)
    edits: List[Edit] = field(default_factory=list)
    changed: List[bool] = field(default_factory=list)
    context_lines: Optional[int] = None

    def __post_init__(self):
        # Lines given without flags are context
        self.changed.extend([False] * (len(self.lines) - len(self.changed)))

    @property
    def num_lines(self) -> int:
        return len(self.lines)

    @property
    def original_text(self) -> str:
        return ''.join(self.lines)

    def add_line(self, line: str, changed: bool = False) -> None:
        self.lines.append(line)
        self.changed.append(changed)

    def add_edit(self, edit: Edit) -> None:
        """Append an edit given in file offsets; edits must arrive in sorted order."""
        self.edits.append(edit.relative_to(self.start_offset))

    def trim_trailing(self, count: int) -> List[str]:
        """Remove and return the last ``count`` lines of the hunk."""
        if count <= 0:
            return []
        trimmed = self.lines[-count:]
        del self.lines[-count:]
        del self.changed[-count:]
        return trimmed

    def absolute_edits(self) -> List[Edit]:
        """Return the hunk's edits with offsets measured from the start of the file."""
        return [edit.relative_to(-self.start_offset) for edit in self.edits]

    def describe(self) -> str:
        """Return a multi-line description of the hunk for debugging."""
        parts = [
            f"Line: {self.start_line}",
            f"Offset: {self.start_offset}",
            f"Number of Lines: {self.num_lines}",
            "Original Text:",
            "vvvvv",
            self.original_text,
            "^^^^^",
            "Edits:",
        ]
        parts.extend(str(edit) for edit in self.edits)
        return '\n'.join(parts) + '\n'
