"""
Wheel geometry: sector angles and the rotation that lands a spin on its winner.

Angles are in radians measured clockwise on screen from 3 o'clock, with the
first sector starting at 12 o'clock.
"""

import math
from typing import List, NamedTuple, Optional, Sequence

from .errors import InvalidInput
from .options import Option
from .sampler import RandomSource, resolve_rng


PALETTE = [
    "#F9D5BB",
    "#FAEDCB",
    "#C6EBBE",
    "#A7D8DE",
    "#C9C9FF",
    "#FFD6E0",
    "#E7D3B8",
    "#D8E2DC",
    "#CDE7BE",
    "#BEE7E8",
]

START_ANGLE = -math.pi / 2
EDGE_PADDING = 0.05
SPIN_TURNS = 5
SPIN_DURATION_MS = 5000


class Sector(NamedTuple):
    name: str
    weight: float
    start: float
    end: float
    color: str

    @property
    def span(self) -> float:
        return self.end - self.start


class SpinTarget(NamedTuple):
    stop_angle: float
    rotation_degrees: float
    final_degrees: float


def sectors(items: Sequence[Option]) -> List[Sector]:
    """Lay out one sector per option; unset or zero weights are drawn as 1."""
    weights = [item.weight or 1 for item in items]
    total = sum(weights)
    if not total > 0:
        return []

    result = []
    start = START_ANGLE
    for index, (item, weight) in enumerate(zip(items, weights)):
        end = start + weight / total * 2 * math.pi
        result.append(Sector(item.name, weight, start, end, PALETTE[index % len(PALETTE)]))
        start = end
    return result


def spin_target(items: Sequence[Option],
                winner: Option,
                rng: Optional[RandomSource] = None,
                turns: int = SPIN_TURNS) -> SpinTarget:
    """
    Compute where the wheel stops so the pointer at 12 o'clock shows ``winner``.

    The stop angle is drawn uniformly inside the winner's sector, kept 5% of
    the sector's span away from either edge. The first sector carrying the
    winner's name is used.

    Args:
        items: Options as drawn on the wheel
        winner: Option returned by the sampler
        rng: Uniform [0, 1) source for the stop position
        turns: Full turns before the wheel settles

    Returns:
        SpinTarget with the stop angle and the CSS-style rotation in degrees

    Raises:
        InvalidInput: if the winner's name is not on the wheel
    """
    draw = resolve_rng(rng)
    for sector in sectors(items):
        if sector.name == winner.name:
            padding = sector.span * EDGE_PADDING
            stop_angle = sector.start + draw() * (sector.span - padding * 2) + padding
            break
    else:
        raise InvalidInput(f"{winner.name!r} is not on the wheel")

    rotation = 360 * turns + 270 - math.degrees(stop_angle)
    return SpinTarget(stop_angle, rotation, rotation % 360)
