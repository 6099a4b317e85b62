"""
Edits and edit sets.

An edit replaces ``length`` characters at ``offset`` of an original text with
replacement text. An edit set groups edits by file key and keeps the edits of
each file sorted so they can be applied in a single pass over the original.
"""

import abc
import bisect
import io
from dataclasses import dataclass
from typing import Dict, IO, List, Optional

from editscript.utils.logging_utils import logger
from .exceptions import InvalidEditError


@dataclass(frozen=True)
class Edit:
    """A single substitution of ``length`` characters at ``offset``."""
    offset: int
    length: int
    replacement: str = ""

    @property
    def end(self) -> int:
        """Offset of the first character past the replaced region."""
        return self.offset + self.length

    @property
    def is_insertion(self) -> bool:
        return self.length == 0

    @property
    def is_deletion(self) -> bool:
        return self.replacement == ""

    def relative_to(self, base: int) -> "Edit":
        """Return a copy of this edit with its offset measured from ``base``."""
        return Edit(self.offset - base, self.length, self.replacement)

    def sort_key(self):
        # Insertions sort before a replacement starting at the same offset
        return (self.offset, self.length)

    def __str__(self) -> str:
        return f"{self.offset}:{self.end} -> {self.replacement!r}"


class EditSetBase(abc.ABC):
    """
    Interface shared by edit sets and rendered patches.

    Implementations map file keys to edits sorted ascending by offset.
    """

    @abc.abstractmethod
    def add(self, key: str, offset: int, length: int, replacement: str) -> None:
        """Add an edit replacing ``length`` characters at ``offset`` of file ``key``."""

    @abc.abstractmethod
    def edits(self) -> Dict[str, List[Edit]]:
        """Return the edits of every file, each list sorted by offset."""

    @abc.abstractmethod
    def apply_to(self, key: str, in_stream: IO[str], out_stream: IO[str]) -> None:
        """Read the original text of ``key`` from ``in_stream`` and write the edited text."""

    @abc.abstractmethod
    def apply_to_string(self, key: str, text: str) -> str:
        """Return ``text`` with the edits of ``key`` applied."""

    @abc.abstractmethod
    def apply_to_file(self, path: str, out_stream: IO[str]) -> None:
        """Apply the edits keyed by ``path`` to the file at ``path``."""

    @abc.abstractmethod
    def create_patch(self, key: str, in_stream: IO[str], context_lines: Optional[int] = None):
        """Build a read-only patch for ``key`` from the original text in ``in_stream``."""


class EditSet(EditSetBase):
    """Mutable collection of non-overlapping edits keyed by file."""

    def __init__(self):
        self._edits: Dict[str, List[Edit]] = {}

    def add(self, key: str, offset: int, length: int, replacement: str) -> None:
        if offset < 0 or length < 0:
            raise InvalidEditError(
                f"Edit for {key!r} has negative offset or length",
                {"key": key, "offset": offset, "length": length}
            )
        self.add_edit(key, Edit(offset, length, replacement))

    def add_edit(self, key: str, edit: Edit) -> None:
        """Insert an existing edit, keeping the file's edits sorted."""
        edits = self._edits.setdefault(key, [])
        if not edits or edits[-1].sort_key() <= edit.sort_key():
            edits.append(edit)
            return
        keys = [e.sort_key() for e in edits]
        edits.insert(bisect.bisect_right(keys, edit.sort_key()), edit)

    def edits(self) -> Dict[str, List[Edit]]:
        return {key: list(edits) for key, edits in self._edits.items()}

    def edits_for(self, key: str) -> List[Edit]:
        """Return the sorted edits of one file (empty if it has none)."""
        return list(self._edits.get(key, []))

    def keys(self) -> List[str]:
        return list(self._edits)

    def apply_to(self, key: str, in_stream: IO[str], out_stream: IO[str]) -> None:
        from ..application.edit_apply import apply_edits
        apply_edits(self._edits.get(key, []), in_stream, out_stream)

    def apply_to_string(self, key: str, text: str) -> str:
        out = io.StringIO()
        self.apply_to(key, io.StringIO(text), out)
        return out.getvalue()

    def apply_to_file(self, path: str, out_stream: IO[str]) -> None:
        from ..file_ops.file_handlers import apply_edits_to_file
        apply_edits_to_file(self, path, out_stream)

    def create_patch(self, key: str, in_stream: IO[str], context_lines: Optional[int] = None):
        from ..rendering.patch import create_patch
        logger.debug(f"Creating patch for {key} from {len(self._edits.get(key, []))} edits")
        return create_patch(self.edits_for(key), key, in_stream, context_lines)

    def __len__(self) -> int:
        return sum(len(edits) for edits in self._edits.values())

    def __repr__(self) -> str:
        return f"EditSet({self._edits!r})"
