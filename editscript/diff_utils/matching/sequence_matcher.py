"""
Shortest edit script search.

Implements the greedy LCS/SES algorithm from Eugene W. Myers, "An O(ND)
Difference Algorithm and Its Variations". For every edit distance ``d`` the
search records, per diagonal ``k = x - y``, the furthest point reachable with
exactly ``d`` insertions and deletions together with the move that got there.
The recorded frontiers are kept for the whole call so the edit script can be
recovered by walking them backwards.

The history grows with the square of the edit distance, so inputs with many
differing units need memory proportional to ``D**2``.
"""

import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence

from editscript.utils.logging_utils import logger
from ..core.config import get_large_input_threshold
from ..core.edit_set import EditSet
from ..core.exceptions import InternalDefectError, SearchLimitExceededError
from ..core.utils import join_units, split_chars, split_lines


class Move(enum.Enum):
    """The non-diagonal move that produced a frontier point."""
    HORIZONTAL = "horizontal"  # insertion of one unit of b
    VERTICAL = "vertical"      # deletion of one unit of a


@dataclass(frozen=True)
class FrontierPoint:
    """Furthest x reached on a diagonal, and how it was reached (None at the origin)."""
    x: int
    move: Optional[Move]


class FrontierArena:
    """
    Table of frontier points indexed by (iteration, diagonal).

    Row ``d`` holds the ``d + 1`` diagonals ``-d, -d + 2, ..., d``, which are
    the only diagonals reachable with exactly ``d`` moves.
    """

    def __init__(self):
        self._rows: List[List[Optional[FrontierPoint]]] = []

    @property
    def depth(self) -> int:
        return len(self._rows)

    def open_row(self) -> int:
        """Allocate the row for the next iteration and return its index."""
        d = len(self._rows)
        self._rows.append([None] * (d + 1))
        return d

    def _index(self, d: int, k: int) -> int:
        if not 0 <= d < len(self._rows) or not -d <= k <= d or (k + d) % 2:
            raise InternalDefectError(
                f"Diagonal {k} is not part of search iteration {d}",
                {"iteration": d, "diagonal": k, "depth": len(self._rows)}
            )
        return (k + d) // 2

    def get(self, d: int, k: int) -> FrontierPoint:
        index = self._index(d, k)
        point = self._rows[d][index]
        if point is None:
            raise InternalDefectError(
                f"No frontier point recorded for diagonal {k} in iteration {d}",
                {"iteration": d, "diagonal": k}
            )
        return point

    def put(self, d: int, k: int, point: FrontierPoint) -> None:
        self._rows[d][self._index(d, k)] = point


def _next_point(arena: FrontierArena, d: int, k: int) -> FrontierPoint:
    # Prefer extending diagonal k+1 (insertion) unless k-1 is further along
    if d == 0:
        return FrontierPoint(0, None)
    if k == -d or (k != d and arena.get(d - 1, k - 1).x < arena.get(d - 1, k + 1).x):
        return FrontierPoint(arena.get(d - 1, k + 1).x, Move.HORIZONTAL)
    return FrontierPoint(arena.get(d - 1, k - 1).x + 1, Move.VERTICAL)


def shortest_edit_trace(a: Sequence[str], b: Sequence[str]) -> FrontierArena:
    """
    Run the greedy search and return the frontier history.

    The last row of the returned arena contains the point that reached
    ``(len(a), len(b))``; its index is the edit distance.

    Raises:
        SearchLimitExceededError: if no path is found within ``len(a) + len(b)`` moves
    """
    n = len(a)
    m = len(b)
    max_distance = n + m
    if max_distance > get_large_input_threshold():
        logger.warning(
            f"Diffing {n} against {m} units; search history memory grows with the square of the edit distance"
        )

    arena = FrontierArena()
    for d in range(max_distance + 1):
        arena.open_row()
        for k in range(-d, d + 1, 2):
            point = _next_point(arena, d, k)
            x = point.x
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x, y = x + 1, y + 1
            arena.put(d, k, FrontierPoint(x, point.move))
            if x >= n and y >= m:
                logger.debug(f"Shortest edit script found: distance {d} for {n}x{m} units")
                return arena

    logger.error(f"Edit script search exceeded maximum distance {max_distance}")
    raise SearchLimitExceededError(
        "Length of shortest edit script exceeds the sum of the input lengths",
        {"n": n, "m": m, "max_distance": max_distance}
    )


def diff(a: Sequence[str], b: Sequence[str], key: str = "") -> EditSet:
    """
    Compute the minimum set of unit insertions and deletions that changes a into b.

    Typically both sequences hold newline-terminated lines of a larger text, but
    any split of the texts into units works (e.g. single characters). The edits
    are keyed by ``key`` and apply to ``join_units(a)``.

    Every edit either deletes exactly one unit of ``a`` (its length is the
    length of that unit and its replacement is empty) or inserts exactly one
    unit of ``b`` (its length is 0). The two degenerate cases, where one side is
    empty, produce a single edit covering the whole text.

    Args:
        a: The original units
        b: The target units
        key: The file key of the resulting edits

    Returns:
        An EditSet transforming ``join_units(a)`` into ``join_units(b)``
    """
    from .edit_script import build_edit_script

    result = EditSet()
    if not a and not b:
        return result
    if not a:
        result.add(key, 0, 0, join_units(b))
        return result
    if not b:
        result.add(key, 0, len(join_units(a)), "")
        return result

    arena = shortest_edit_trace(a, b)
    return build_edit_script(key, a, b, arena)


def diff_lines(key: str, original: str, target: str) -> EditSet:
    """Diff two texts line by line."""
    return diff(split_lines(original), split_lines(target), key)


def diff_chars(key: str, original: str, target: str) -> EditSet:
    """Diff two texts character by character."""
    return diff(split_chars(original), split_chars(target), key)
