"""
editscript - minimal edit scripts and unified diffs.
"""

__version__ = "0.1.0"
