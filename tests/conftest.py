# tests/conftest.py
#
# Shared fixtures for the stepsort test suite.

"""Test configuration and shared fixtures for stepsort.

Provides seeded inputs, a controller over a seeded array, and a recorder
that collects everything the controller emits.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure the package can be imported without installing it
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from helpers import Recorder  # noqa: E402
from stepsort import ALGORITHM_KEYS, ScheduleController  # noqa: E402


@pytest.fixture(params=ALGORITHM_KEYS)
def algorithm(request):
    """Each of the nine algorithm keys in turn."""
    return request.param


@pytest.fixture
def seeded_values():
    """Forty random values in the default generator range, fixed seed."""
    return np.random.default_rng(1234).integers(10, 310, size=40).tolist()


@pytest.fixture
def controller():
    """A controller over a seeded 16-value array, cancelled on teardown."""
    ctl = ScheduleController(size=16, seed=99)
    yield ctl
    ctl.cancel()
    ctl.wait(timeout=5)


@pytest.fixture
def recorder(controller):
    return Recorder(controller)
