"""
Option model and option-list loading.

Options arrive from users as loosely typed values (form fields, CSV cells,
JSON). This module normalizes them into immutable ``Option`` tuples before
they reach the sampler.
"""

import re
import csv
import json
import math
import warnings
from pathlib import Path
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from .errors import InvalidInput


MIN_OPTIONS = 2
MAX_OPTIONS = 10
DEFAULT_WEIGHT = 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class Option(NamedTuple):
    """A named wheel option with its relative weight."""

    name: str
    weight: Union[int, float]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Option":
        return cls(data["name"], data.get("weight"))


def parse_weight(value: Any, default: int = DEFAULT_WEIGHT) -> int:
    """
    Read a weight the way the picker form does.

    Leading integers are taken from strings ("5kg" -> 5), floats truncate
    toward zero, and anything missing, unparsable or zero becomes ``default``.
    Negative values are returned as-is for the caller to reject.

    Args:
        value: Raw weight from a form field, file or dict
        default: Weight used when ``value`` does not give a non-zero integer

    Returns:
        Integer weight
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            warnings.warn(f"Weight {value!r} is not finite, using {default}")
            return default
        parsed = int(value)
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            if str(value).strip():
                warnings.warn(f"Could not parse weight {value!r}, using {default}")
            return default
        parsed = int(match.group(1))

    return parsed or default


def _coerce(raw: Any) -> Option:
    if isinstance(raw, Option):
        name, weight = raw.name, raw.weight
    elif isinstance(raw, dict):
        name, weight = raw.get("name"), raw.get("weight")
    elif isinstance(raw, str):
        name, weight = raw, None
    else:
        try:
            name, weight = raw
        except (TypeError, ValueError):
            raise InvalidInput(f"Cannot read an option from {raw!r}")

    name = "" if name is None else str(name).strip()
    if not name:
        raise InvalidInput("Option names must not be empty")

    weight = parse_weight(weight)
    if weight < 0:
        raise InvalidInput(f"Weight of {name!r} must be positive, got {weight}")
    try:
        float(weight)
    except OverflowError:
        raise InvalidInput(f"Weight of {name!r} is too large")
    return Option(name, weight)


def normalize_options(raw_options: Iterable[Any]) -> List[Option]:
    """
    Build ``Option``s from dicts, (name, weight) pairs, bare names or Options.

    Raises:
        InvalidInput: for blank names or negative weights
    """
    return [_coerce(raw) for raw in raw_options]


def validate_options(items: Optional[Iterable[Option]]) -> Tuple[Option, ...]:
    """
    Check that there are enough options to spin.

    Returns:
        Tuple snapshot of ``items``

    Raises:
        InvalidInput: when fewer than ``MIN_OPTIONS`` options are given
    """
    snapshot = tuple(items or ())
    if len(snapshot) < MIN_OPTIONS:
        raise InvalidInput(f"At least {MIN_OPTIONS} options are required, got {len(snapshot)}")
    return snapshot


class OptionsConfig:
    """Configuration for a picker run: the options plus optional trial settings."""

    def __init__(self, config_dict: Dict[str, Any]):
        self.config = config_dict
        self.raw_options = config_dict.get("options", [])
        self.trial_count = config_dict.get("trial_count")
        self.seed = config_dict.get("seed")
        self.description = config_dict.get("description", "")

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "OptionsConfig":
        """Load options from a .json, .csv or .txt file."""
        file_path = Path(config_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Options file not found: {file_path}")

        if file_path.suffix == '.json':
            return cls(cls._load_json(file_path))
        elif file_path.suffix == '.csv':
            return cls({"options": cls._load_csv(file_path)})
        elif file_path.suffix == '.txt':
            return cls({"options": cls._load_text(file_path)})
        else:
            raise ValueError(f"Unsupported file format: {file_path.suffix}")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "OptionsConfig":
        """Create configuration from dictionary."""
        return cls(config_dict)

    @classmethod
    def from_specs(cls, specs: Iterable[str]) -> "OptionsConfig":
        """Create configuration from command-line specs like ``"Pizza:3"`` or ``"Sushi"``."""
        options = []
        for spec in specs:
            name, sep, weight = spec.rpartition(':')
            options.append({"name": name, "weight": weight} if sep else {"name": spec, "weight": None})
        return cls({"options": options})

    @staticmethod
    def _load_json(file_path: Path) -> Dict[str, Any]:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # A bare list is shorthand for {"options": [...]}
        if isinstance(data, list):
            return {"options": data}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object or list in {file_path}")
        return data

    @staticmethod
    def _load_csv(file_path: Path) -> List[Dict[str, Any]]:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            return [
                {"name": row.get("name"), "weight": row.get("weight")}
                for row in reader
                if (row.get("name") or "").strip()
            ]

    @staticmethod
    def _load_text(file_path: Path) -> List[Dict[str, Any]]:
        """One option per line: ``name`` or ``name,weight``."""
        options = []
        with open(file_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                name, _, weight = line.rpartition(',') if ',' in line else (line, '', None)
                options.append({"name": name, "weight": weight})
        return options

    def options(self) -> List[Option]:
        """Normalized options from this configuration."""
        return normalize_options(self.raw_options)
