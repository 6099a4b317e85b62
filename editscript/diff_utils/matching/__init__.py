"""
Matching utilities for the diff_utils package.

This module computes minimal edit scripts between two sequences of units.
"""

from .sequence_matcher import diff, diff_lines, diff_chars, shortest_edit_trace
from .sequence_matcher import FrontierArena, FrontierPoint, Move
from .edit_script import build_edit_script
