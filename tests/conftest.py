"""Shared fixtures for the report builder tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class FixedRng:
    """Stand-in random source that returns queued values from `integers`."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        value = self._values.pop(0)
        assert low <= value < high, f"queued value {value} outside [{low}, {high})"
        return value


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fixed_rng():
    return FixedRng
