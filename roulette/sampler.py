"""
Weighted sampler for the roulette wheel.

This module provides the core draw: one option chosen with probability
proportional to its weight, plus the seeding helpers used to make runs
reproducible.
"""

import math
import random
import numbers
import hashlib
import warnings
import contextlib
import numpy as np
from typing import Callable, Optional, Sequence, Union

from .errors import InvalidInput
from .options import Option


RandomSource = Union[Callable[[], float], random.Random, np.random.Generator]


def resolve_rng(rng: Optional[RandomSource] = None) -> Callable[[], float]:
    """
    Turn an rng argument into a zero-argument uniform [0, 1) callable.

    Args:
        rng: None for the module-level ``random.random``, a callable, or an
            object with a ``random()`` method (random.Random, numpy Generator)

    Returns:
        Callable returning floats in [0, 1)
    """
    if rng is None:
        return random.random
    if callable(rng):
        return rng
    return rng.random


def float_weight(item: Option) -> float:
    weight = item.weight
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise InvalidInput(f"Weight of {item.name!r} is not a number: {weight!r}")
    try:
        return float(weight)
    except OverflowError:
        raise InvalidInput(f"Weight of {item.name!r} is too large")


def total_weight(items: Sequence[Option]) -> float:
    """Sum of the weights of ``items``."""
    return sum(float_weight(item) for item in items)


def weighted_random(items: Optional[Sequence[Option]],
                    rng: Optional[RandomSource] = None) -> Optional[Option]:
    """
    Pick one option with probability proportional to its weight.

    When the total weight is not positive (all zero, negative-dominated or
    NaN) every option is equally likely instead.

    Args:
        items: Options in wheel order; never modified
        rng: Uniform [0, 1) source, see ``resolve_rng``

    Returns:
        The chosen option, or None when ``items`` is empty or None
    """
    if not items:
        return None

    draw = resolve_rng(rng)
    weights = [float_weight(item) for item in items]
    total = sum(weights)

    if not total > 0:
        if math.isnan(total):
            warnings.warn("Total weight is NaN, picking uniformly")
        index = min(int(draw() * len(items)), len(items) - 1)
        return items[index]

    remaining = draw() * total
    for item, weight in zip(items, weights):
        remaining -= weight
        if remaining < 0:
            return item

    # Rounding can leave remaining at exactly 0 after the last subtraction
    return items[-1]


@contextlib.contextmanager
def use_seed(seed: int):
    state = random.getstate()
    np_state = np.random.get_state()
    random.seed(seed)
    # NumPy's RandomState requires a 32-bit unsigned seed
    np.random.seed(int(seed % (2**32)))
    try:
        yield
    finally:
        random.setstate(state)
        np.random.set_state(np_state)


def derive_seed(base_seed: int, trial_count: int, run_idx: int) -> int:
    s = f"{base_seed}|{trial_count}|{run_idx}".encode()
    return int.from_bytes(hashlib.sha256(s).digest()[:8], "big")
