from __future__ import annotations

import random

import pytest

from helpers import ScriptedRandom
from solution_wheel.config.settings import WheelSettings
from solution_wheel.core.state import Idle, Landed, Spinning
from solution_wheel.wheel.options import SOLUTION_OPTIONS
from solution_wheel.wheel.spin import (
    SpinController,
    plan_spin,
    reverse_section,
    sector_under_pointer,
)


def test_reverse_section_mirrors_indices() -> None:
    assert [reverse_section(i, 8) for i in range(8)] == [7, 6, 5, 4, 3, 2, 1, 0]
    assert reverse_section(0, 1) == 0


def test_plan_spin_worked_example() -> None:
    rng = ScriptedRandom(3, 3)
    plan = plan_spin(0.0, 8, rng)

    assert plan.target == 3
    assert plan.reversed_section == 4
    assert plan.delta == pytest.approx(202.5)
    assert plan.extra_rotations == 3
    assert plan.start_angle == 0.0
    assert plan.target_angle == pytest.approx(1282.5)
    assert rng.calls == [(8,), (3, 6)]


def test_plan_spin_wraps_baseline_only_for_delta() -> None:
    plan = plan_spin(1282.5, 8, ScriptedRandom(0, 5))

    # base = 202.5, reversed = 7 -> delta = 337.5 - 202.5
    assert plan.delta == pytest.approx(135.0)
    assert plan.target_angle == pytest.approx(1282.5 + 5 * 360 + 135.0)


@pytest.mark.parametrize("baseline", [0.0, 37.3, 359.9, 1282.5, 9000.0])
def test_target_sector_always_lands_under_pointer(baseline: float) -> None:
    rng = random.Random(1234)
    for _ in range(200):
        plan = plan_spin(baseline, len(SOLUTION_OPTIONS), rng)
        assert sector_under_pointer(plan.target_angle, len(SOLUTION_OPTIONS)) == plan.target
        assert 3 <= plan.extra_rotations < 6
        # At least two full turns forward even after the negative delta
        assert plan.target_angle - baseline > 2 * 360


def test_single_option_wheel() -> None:
    plan = plan_spin(10.0, 1, ScriptedRandom(0, 4))
    assert plan.target == 0
    assert sector_under_pointer(plan.target_angle, 1) == 0


def test_plan_spin_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        plan_spin(0.0, 0, ScriptedRandom(0, 3))
    with pytest.raises(ValueError):
        plan_spin(0.0, 8, ScriptedRandom(0, 3), min_rotations=4, max_rotations=4)


def _controller(*values: int) -> SpinController:
    return SpinController(settings=WheelSettings(), rng=ScriptedRandom(*values))


def test_spin_lands_on_target_after_duration() -> None:
    spin = _controller(3, 3)
    landed: list = []
    spin.add_landed_listener(landed.append)

    assert isinstance(spin.state, Idle)
    assert spin.selected_option is None
    assert spin.request_spin() is True
    assert isinstance(spin.state, Spinning)

    spin.update(1500)
    assert 0.0 < spin.angle < 1282.5
    assert spin.is_spinning

    spin.update(1500)
    assert not spin.is_spinning
    assert isinstance(spin.state, Landed)
    assert spin.state.index == 3
    assert spin.baseline == pytest.approx(1282.5)
    assert spin.angle == pytest.approx(1282.5)
    assert spin.selected_option == SOLUTION_OPTIONS[3]
    assert spin.selected_option.caption == "🎵 לשמוע מוזיקה"
    assert landed == [SOLUTION_OPTIONS[3]]


def test_spin_request_ignored_while_spinning() -> None:
    spin = _controller(3, 3, 1, 4)
    assert spin.request_spin()
    spin.update(1000)
    angle = spin.angle

    assert spin.request_spin() is False
    assert spin.angle == angle
    assert spin.state.target == 3

    spin.update(2000)
    assert spin.selected_option == SOLUTION_OPTIONS[3]


def test_angle_never_moves_backwards_during_spin() -> None:
    spin = _controller(6, 5)
    spin.request_spin()
    previous = spin.angle
    for _ in range(40):
        spin.update(100)
        assert spin.angle >= previous - 1e-9
        previous = spin.angle


def test_second_spin_starts_from_baseline_and_keeps_caption() -> None:
    spin = _controller(3, 3, 0, 4)
    spin.request_spin()
    spin.update(3000)

    assert spin.request_spin()
    assert spin.state.start_angle == pytest.approx(1282.5)
    # Previous result stays visible until the new spin lands
    assert spin.selected_option == SOLUTION_OPTIONS[3]

    spin.update(3000)
    assert spin.selected_option == SOLUTION_OPTIONS[0]
    assert sector_under_pointer(spin.baseline, 8) == 0


def test_failing_landed_listener_does_not_block_others() -> None:
    spin = _controller(2, 3)
    seen: list = []

    def broken(option) -> None:
        raise RuntimeError("listener failure")

    spin.add_landed_listener(broken)
    spin.add_landed_listener(seen.append)
    spin.request_spin()
    spin.update(3000)

    assert seen == [SOLUTION_OPTIONS[2]]


def test_duration_and_rotation_range_come_from_settings() -> None:
    settings = WheelSettings(spin_duration_ms=500, min_extra_rotations=1, max_extra_rotations=2)
    rng = ScriptedRandom(0, 1)
    spin = SpinController(settings=settings, rng=rng)

    spin.request_spin()
    assert rng.calls[1] == (1, 2)
    spin.update(500)
    assert not spin.is_spinning


def test_empty_catalog_rejected() -> None:
    with pytest.raises(ValueError):
        SpinController(options=())
