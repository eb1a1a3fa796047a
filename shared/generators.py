"""
Random short code generators — pure, side-effect-free functions.

Codes use the system PRNG; they are identifiers, not secrets. Collision
checks against existing links are the registry's job, not the generator's.
"""

from __future__ import annotations

import random
import string
from typing import Callable

CODE_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def generate_short_code(length: int = 6) -> str:
    """Generate an alphanumeric short code, each character drawn uniformly.

    Args:
        length: Number of characters (default 6, giving a 62**6 code space).

    Returns:
        Random string over ``[a-zA-Z0-9]`` of the requested length.
    """
    return "".join(random.choice(CODE_ALPHABET) for _ in range(length))


def short_code_generator(length: int = 6) -> Callable[[], str]:
    """Return a zero-argument generator bound to *length*."""

    def generate() -> str:
        return generate_short_code(length)

    return generate
