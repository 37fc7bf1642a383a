import random

import pytest

from roulette import Option


class SequenceRng:
    """Deterministic stand-in for random.random that replays fixed values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def seeded():
    return random.Random(1234)


@pytest.fixture
def yes_no():
    return [Option("Yes", 1), Option("No", 1)]


@pytest.fixture
def one_to_three():
    return [Option("A", 1), Option("B", 3)]
