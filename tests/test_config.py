# tests/test_config.py

"""Pacing formula and RunConfig validation."""

import numpy as np
import pytest

from stepsort import ALGORITHM_KEYS, ConfigurationError, RunConfig, step_delay_ms
from stepsort.config import MAX_ARRAY_SIZE, algorithm_name, validate_size


@pytest.mark.parametrize("speed, expected", [
    (1, 190.0), (5, 110.0), (9, 30.0), (10, 10.0), (11, 10.0), (500, 10.0),
])
def test_step_delay_from_speed(speed, expected):
    assert step_delay_ms(speed) == expected


def test_explicit_delay_wins_even_when_zero():
    assert step_delay_ms(1, 0) == 0.0
    assert step_delay_ms(10, 250) == 250.0


def test_nine_algorithms():
    assert ALGORITHM_KEYS == (
        "bubble", "selection", "insertion", "merge", "quick",
        "heap", "radix", "counting", "bucket",
    )
    assert algorithm_name("heap") == "Heap Sort"
    with pytest.raises(ConfigurationError):
        algorithm_name("shell")


def test_build_normalises_values():
    config = RunConfig.build("merge", np.array([3, 1, 2]), speed=2)
    assert config.values == (3, 1, 2)
    assert config.delay_ms == 170.0
    assert config.delay_seconds == pytest.approx(0.17)
    assert config.name == "Merge Sort"


def test_build_accepts_integral_floats():
    assert RunConfig.build("quick", [3.0, 1.0]).values == (3, 1)


def test_counting_and_bucket_accept_negatives():
    for key in ("counting", "bucket", "quick"):
        assert RunConfig.build(key, [-5, 3, 0]).values == (-5, 3, 0)


@pytest.mark.parametrize("values", [
    [], [1, 2.5], [True, 2], ["3", 1], [float("nan")], list(range(MAX_ARRAY_SIZE + 1)),
])
def test_build_rejects_bad_values(values):
    with pytest.raises(ConfigurationError):
        RunConfig.build("bubble", values)


@pytest.mark.parametrize("speed", [0, -1, 2.5, True, "5"])
def test_build_rejects_bad_speed(speed):
    with pytest.raises(ConfigurationError):
        RunConfig.build("bubble", [1], speed=speed)


def test_build_rejects_negative_delay():
    with pytest.raises(ConfigurationError):
        RunConfig.build("bubble", [1], delay_ms=-1)


def test_radix_rejects_negative_values():
    with pytest.raises(ConfigurationError, match="non-negative"):
        RunConfig.build("radix", [4, -2])


@pytest.mark.parametrize("size", [0, -4, MAX_ARRAY_SIZE + 1, 3.0, None])
def test_validate_size_rejects(size):
    with pytest.raises(ConfigurationError):
        validate_size(size)


def test_validate_size_accepts_bounds():
    assert validate_size(1) == 1
    assert validate_size(MAX_ARRAY_SIZE) == MAX_ARRAY_SIZE
