from __future__ import annotations

import pytest

from lunch_roulette.maps.config import MapsConfig
from lunch_roulette.selection.config import SelectionConfig


def test_default_decay_is_half():
    assert SelectionConfig(decay_factor=0.5).decay_factor == 0.5


@pytest.mark.parametrize("decay", [0.0, 1.0, 2.0])
def test_decay_must_be_inside_unit_interval(decay):
    with pytest.raises(ValueError):
        SelectionConfig(decay_factor=decay)


def test_concurrency_must_be_positive():
    with pytest.raises(ValueError):
        SelectionConfig(max_concurrency=0)


def test_maps_enabled_only_with_key():
    assert MapsConfig(api_key="k").enabled
    assert not MapsConfig(api_key="").enabled


def test_history_limit_must_be_positive():
    with pytest.raises(ValueError):
        SelectionConfig(history_limit=0)
