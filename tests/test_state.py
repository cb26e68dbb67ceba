from __future__ import annotations

from solution_wheel.core.state import Idle, Landed, Spinning, WheelStateMachine
from solution_wheel.wheel.options import SOLUTION_OPTIONS


def test_starts_idle() -> None:
    machine = WheelStateMachine()
    assert isinstance(machine.state, Idle)
    assert not machine.is_spinning


def test_spin_cycle() -> None:
    machine = WheelStateMachine()
    assert machine.transition(Spinning(1, 0.0, 900.0))
    assert machine.is_spinning
    assert machine.transition(Landed(SOLUTION_OPTIONS[1], 1))
    assert machine.transition(Spinning(2, 900.0, 2000.0))


def test_invalid_transitions_rejected() -> None:
    machine = WheelStateMachine()
    assert machine.transition(Landed(SOLUTION_OPTIONS[0], 0)) is False
    assert isinstance(machine.state, Idle)

    machine.transition(Spinning(0, 0.0, 1000.0))
    assert machine.transition(Spinning(1, 0.0, 1000.0)) is False
    assert machine.transition(Idle()) is False
    assert machine.state.target == 0


def test_listeners_receive_old_and_new_state() -> None:
    machine = WheelStateMachine()
    changes: list = []
    machine.add_listener(lambda old, new: changes.append((type(old), type(new))))

    def broken(old, new) -> None:
        raise RuntimeError("boom")

    machine.add_listener(broken)
    machine.transition(Spinning(0, 0.0, 1000.0))

    assert changes == [(Idle, Spinning)]
    assert machine.is_spinning

    machine.remove_listener(broken)
    machine.transition(Landed(SOLUTION_OPTIONS[0], 0))
    assert changes[-1] == (Spinning, Landed)
