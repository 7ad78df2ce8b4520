"""Shared fixtures for the simplex_homology test suite."""

import math

import numpy as np
import pytest

from simplex_homology.utils.logging import shutdown_logging


@pytest.fixture(scope="function", autouse=True)
def cleanup_logging():
    """Drop registered loggers after each test."""
    yield
    shutdown_logging()


@pytest.fixture
def unit_square():
    """Corners of the unit square, counter-clockwise."""
    return np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


@pytest.fixture
def square_diagonal():
    return math.sqrt(2.0)


@pytest.fixture
def filled_triangle():
    return {
        0: [(0,), (1,), (2,)],
        1: [(0, 1), (0, 2), (1, 2)],
        2: [(0, 1, 2)],
    }


@pytest.fixture
def hollow_triangle():
    return {
        0: [(0,), (1,), (2,)],
        1: [(0, 1), (0, 2), (1, 2)],
    }


@pytest.fixture
def random_cloud():
    rng = np.random.default_rng(7)
    return rng.uniform(0.0, 100.0, size=(14, 2))


@pytest.fixture
def circle_cloud():
    """12 points evenly spaced on a circle of radius 100 centred at (250, 250)."""
    t = np.linspace(0.0, 2.0 * np.pi, 12, endpoint=False)
    return np.column_stack([250.0 + 100.0 * np.cos(t), 250.0 + 100.0 * np.sin(t)])
