"""
Pytest configuration and shared fixtures.
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


LINE_ALPHABET = ["a\n", "b\n", "c\n", "d\n", "\n"]


@pytest.fixture
def rng():
    """A seeded random generator so generated cases are reproducible."""
    return random.Random(20131019)


@pytest.fixture
def make_lines(rng):
    """Build a random list of lines drawn from a small alphabet."""
    def _make(max_len=12, alphabet=LINE_ALPHABET):
        return [rng.choice(alphabet) for _ in range(rng.randint(0, max_len))]
    return _make


@pytest.fixture
def numbered_text():
    """Build a text of ``count`` distinct numbered lines."""
    def _make(count, prefix="line"):
        return ''.join(f"{prefix}{i}\n" for i in range(1, count + 1))
    return _make
