"""
Option board: the editable option list behind the picker.

The board owns the mutable list; the sampler and trial runner only ever see
a tuple snapshot of it.
"""

from typing import Any, Iterable, List, Optional, Tuple

from .errors import InvalidInput
from .options import MAX_OPTIONS, MIN_OPTIONS, DEFAULT_WEIGHT, Option, normalize_options, validate_options
from .sampler import RandomSource, weighted_random
from .trials import TRIAL_COUNT, SimulationReport, simulate
from .wheel import Sector, SpinTarget, sectors, spin_target


class SpinResult:
    """Winner of a single spin together with where the wheel stops."""

    def __init__(self, winner: Option, target: SpinTarget):
        self.winner = winner
        self.target = target

    def __repr__(self) -> str:
        return f"SpinResult({self.winner.name!r}, {self.target.final_degrees:.1f}deg)"


class OptionBoard:
    """Editable list of options with the picker's size limits."""

    def __init__(self, options: Optional[Iterable[Any]] = None, max_options: int = MAX_OPTIONS):
        self.max_options = max_options
        if options is None:
            self._options: List[Option] = [Option(f"Option {i}", DEFAULT_WEIGHT) for i in (1, 2)]
        else:
            self._options = normalize_options(options)
        if len(self._options) > max_options:
            raise InvalidInput(f"At most {max_options} options are allowed, got {len(self._options)}")
        validate_options(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __getitem__(self, index: int) -> Option:
        return self._options[index]

    @property
    def can_remove(self) -> bool:
        return len(self._options) > MIN_OPTIONS

    def add(self, name: Optional[str] = None, weight: Any = DEFAULT_WEIGHT) -> Option:
        if len(self._options) >= self.max_options:
            raise InvalidInput(f"At most {self.max_options} options are allowed")
        if name is None:
            name = f"Option {len(self._options) + 1}"
        option = normalize_options([(name, weight)])[0]
        self._options.append(option)
        return option

    def remove(self, index: int) -> Option:
        if not self.can_remove:
            raise InvalidInput(f"Cannot go below {MIN_OPTIONS} options")
        return self._options.pop(index)

    def update(self, index: int, name: Optional[str] = None, weight: Any = None) -> Option:
        """Replace the option at ``index``, keeping whichever field is not given."""
        current = self._options[index]
        option = normalize_options([(
            current.name if name is None else name,
            current.weight if weight is None else weight,
        )])[0]
        self._options[index] = option
        return option

    def snapshot(self) -> Tuple[Option, ...]:
        return tuple(self._options)

    def sectors(self) -> List[Sector]:
        return sectors(self._options)

    def spin(self, rng: Optional[RandomSource] = None) -> SpinResult:
        """
        Validate the board, draw a winner and work out the wheel's stop position.

        Raises:
            InvalidInput: when the board has fewer than two options
        """
        items = validate_options(self._options)
        winner = weighted_random(items, rng)
        return SpinResult(winner, spin_target(items, winner, rng))

    def simulate(self, trial_count: int = TRIAL_COUNT, rng: Optional[RandomSource] = None) -> SimulationReport:
        return simulate(self.snapshot(), trial_count, rng)
