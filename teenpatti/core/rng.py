"""
Process-wide randomness source.

Shuffling and the bot policy draw from one ``random.Random``. Tests swap
it for a seeded or scripted generator with ``set_rng`` / ``seed_rng``.
"""

import random
from typing import Optional

_rng: random.Random = random.Random()


def get_rng() -> random.Random:
    """Return the current process-wide generator."""
    return _rng


def set_rng(rng: random.Random) -> random.Random:
    """
    Replace the process-wide generator.

    Returns:
        The generator that was in place before, so callers can restore it.
    """
    global _rng
    previous = _rng
    _rng = rng
    return previous


def seed_rng(seed: Optional[int] = None) -> random.Random:
    """Install a fresh generator seeded with ``seed`` and return it."""
    rng = random.Random(seed)
    set_rng(rng)
    return rng
