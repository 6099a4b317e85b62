"""
Recovery of the edit script from a shortest edit trace.
"""

from typing import List, Sequence

from editscript.utils.logging_utils import logger
from ..core.edit_set import Edit, EditSet
from ..core.utils import unit_offsets
from .sequence_matcher import FrontierArena, Move


def build_edit_script(key: str, a: Sequence[str], b: Sequence[str], arena: FrontierArena) -> EditSet:
    """
    Walk the frontier history backwards and emit one edit per non-diagonal move.

    Starting from the diagonal of ``(len(a), len(b))`` in the last iteration,
    each recorded move names the diagonal it came from in the previous
    iteration. The point on that diagonal is where the move started: a
    horizontal move inserts ``b[y]`` before ``a[x]`` and a vertical move
    deletes ``a[x]``.

    Args:
        key: The file key for the resulting edits
        a: The original units
        b: The target units
        arena: The frontier history returned by ``shortest_edit_trace``

    Returns:
        An EditSet with the edits in ascending offset order
    """
    offsets = unit_offsets(a)
    k = len(a) - len(b)
    discovered: List[Edit] = []

    for d in range(arena.depth - 1, 0, -1):
        move = arena.get(d, k).move
        prev_k = k + 1 if move is Move.HORIZONTAL else k - 1
        prev_x = arena.get(d - 1, prev_k).x
        if move is Move.HORIZONTAL:
            prev_y = prev_x - prev_k
            discovered.append(Edit(offsets[prev_x], 0, b[prev_y]))
        else:
            discovered.append(Edit(offsets[prev_x], len(a[prev_x]), ""))
        k = prev_k

    result = EditSet()
    for edit in reversed(discovered):
        result.add_edit(key, edit)

    logger.debug(f"Built edit script with {len(discovered)} edits for {key!r}")
    return result
