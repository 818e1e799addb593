"""Tests for benchmark lifecycle states."""

import dataclasses

import pytest

from crossbench.core.state import IDLE, Computing, Error, Idle, Success


def test_states_compare_by_value(make_result):
    result = make_result(64, general=1.0, accelerated=2.0)

    assert IDLE == Idle()
    assert Computing(64) == Computing(64)
    assert Computing(64) != Computing(128)
    assert Success(result, (result,)) == Success(result, (result,))
    assert Error("boom", 64) == Error(message="boom", size=64)


def test_states_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Computing(64).size = 128  # type: ignore[misc]
