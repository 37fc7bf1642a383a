"""
Repeated-trial simulation built on the weighted sampler.

``run_trials`` spins the wheel a fixed number of times and tallies the
winners by name; ``SimulationReport`` sets those tallies against the
theoretical share of each option.
"""

import numbers
import numpy as np
from typing import Any, Dict, List, Optional, Sequence

from .errors import InvalidInput
from .options import Option, validate_options
from .sampler import RandomSource, float_weight, resolve_rng, weighted_random


TRIAL_COUNT = 1000


def run_trials(items: Sequence[Option],
               trial_count: int = TRIAL_COUNT,
               rng: Optional[RandomSource] = None) -> Dict[str, int]:
    """
    Spin ``trial_count`` times and count how often each name wins.

    Options sharing a name share one counter.

    Args:
        items: At least two options, in wheel order
        trial_count: Number of spins, a positive integer
        rng: Uniform [0, 1) source passed to every spin

    Returns:
        Mapping of name to win count, in first-appearance order

    Raises:
        InvalidInput: for fewer than two options or a bad trial count
    """
    snapshot = validate_options(items)
    if isinstance(trial_count, bool) or not isinstance(trial_count, numbers.Integral) or trial_count < 1:
        raise InvalidInput(f"Trial count must be a positive integer, got {trial_count!r}")

    draw = resolve_rng(rng)
    tally = {item.name: 0 for item in snapshot}

    for _ in range(trial_count):
        winner = weighted_random(snapshot, draw)
        if winner is not None:
            tally[winner.name] += 1

    return tally


def _shares(items: Sequence[Option], first_only: bool) -> Dict[str, float]:
    weights = [float_weight(item) for item in items]
    total = sum(weights)
    shares: Dict[str, float] = {}
    for item, weight in zip(items, weights):
        share = weight / total * 100 if total > 0 else 100 / len(items)
        if item.name not in shares:
            shares[item.name] = share
        elif not first_only:
            shares[item.name] += share
    return shares


def theoretical_percentages(items: Sequence[Option]) -> Dict[str, float]:
    """
    Expected win percentage per name, as shown next to each option.

    Falls back to an even split when the total weight is not positive. For
    repeated names the first occurrence's weight is used.
    """
    return _shares(items, first_only=True)


def expected_shares(items: Sequence[Option]) -> Dict[str, float]:
    """
    Expected percentage of the name-keyed tally per name.

    Unlike ``theoretical_percentages`` this adds up every option carrying the
    name, so the values always sum to 100.
    """
    return _shares(items, first_only=False)


class SimulationRow:
    """Observed and expected results for one option name."""

    def __init__(self, name: str, count: int, percentage: float, theoretical: float,
                 expected_share: Optional[float] = None):
        self.name = name
        self.count = count
        self.percentage = percentage
        self.theoretical = theoretical
        self.expected_share = theoretical if expected_share is None else expected_share

    @property
    def deviation(self) -> float:
        return self.percentage - self.expected_share

    def format_line(self) -> str:
        return f"{self.name}: {self.count} times ({self.percentage:.1f}%) (expected: {self.theoretical:.1f}%)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "percentage": self.percentage,
            "theoretical": self.theoretical,
            "expected_share": self.expected_share,
        }


class SimulationReport:
    """Tally of a simulation run compared against theoretical proportions."""

    def __init__(self, rows: List[SimulationRow], trial_count: int):
        self.rows = rows
        self.trial_count = trial_count

    @classmethod
    def from_tally(cls, items: Sequence[Option], tally: Dict[str, int], trial_count: int) -> "SimulationReport":
        """
        Build a report from the output of ``run_trials``.

        Args:
            items: The options the tally was produced from
            tally: Name to win count
            trial_count: Number of spins in the run

        Returns:
            SimulationReport with one row per tallied name
        """
        theoretical = theoretical_percentages(items)
        shares = expected_shares(items)
        rows = [
            SimulationRow(
                name=name,
                count=count,
                percentage=count / trial_count * 100,
                theoretical=theoretical.get(name, 0.0),
                expected_share=shares.get(name, 0.0),
            )
            for name, count in tally.items()
        ]
        return cls(rows, trial_count)

    def chi_square(self) -> float:
        """Pearson chi-square statistic of observed counts against expected counts."""
        observed = np.array([row.count for row in self.rows], dtype=float)
        expected = np.array([row.expected_share for row in self.rows], dtype=float) / 100 * self.trial_count
        mask = expected > 0
        return float(np.sum((observed[mask] - expected[mask]) ** 2 / expected[mask]))

    def max_deviation(self) -> float:
        """Largest absolute gap between observed percentage and expected share."""
        if not self.rows:
            return 0.0
        return float(np.max(np.abs([row.deviation for row in self.rows])))

    def within_tolerance(self, points: float = 5.0) -> bool:
        return self.max_deviation() <= points

    def format_lines(self) -> List[str]:
        return [row.format_line() for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trial_count": self.trial_count,
            "chi_square": self.chi_square(),
            "max_deviation": self.max_deviation(),
            "options": {row.name: row.to_dict() for row in self.rows},
        }


def simulate(items: Sequence[Option],
             trial_count: int = TRIAL_COUNT,
             rng: Optional[RandomSource] = None) -> SimulationReport:
    """Run ``trial_count`` spins and build the comparison report."""
    snapshot = validate_options(items)
    tally = run_trials(snapshot, trial_count, rng)
    return SimulationReport.from_tally(snapshot, tally, trial_count)
