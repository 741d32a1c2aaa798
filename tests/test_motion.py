import pytest

from carsim import MovementModel, nearest_floor


@pytest.mark.parametrize(
    "position,expected",
    [(0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (2.51, 3), (4.97, 5)],
)
def test_nearest_floor_rounds_halves_up(position, expected):
    assert nearest_floor(position) == expected


def test_step_moves_one_increment_up():
    assert MovementModel(0.25).step(0.0, 2) == (0.25, False)


def test_step_moves_one_increment_down():
    assert MovementModel(0.25).step(3.0, 1) == (2.75, False)


def test_step_snaps_when_within_one_increment():
    assert MovementModel(0.25).step(0.9, 1) == (1.0, True)
    assert MovementModel(0.25).step(1.1, 1) == (1.0, True)


def test_step_at_target_arrives_immediately():
    assert MovementModel(0.03).step(2.0, 2) == (2.0, True)


def test_step_never_passes_target_when_exactly_one_increment_away():
    position, arrived = MovementModel(0.5).step(0.5, 1)

    assert position == 1.0
    assert not arrived
