import pytest

from routing.eta_service import estimate_eta_minutes, round_half_up, seconds_to_minutes


def test_eta_three_vertex_route():
    # vertex 1 of 3 on a 20 minute route: round(6.67)
    assert estimate_eta_minutes(1, 3, 20) == 7


def test_eta_at_route_start_is_zero():
    assert estimate_eta_minutes(0, 250, 47.5) == 0


def test_eta_never_reaches_total_duration():
    # last vertex is index n-1, so the approximation stays below the total
    assert estimate_eta_minutes(99, 100, 60) == 59


def test_eta_rounds_half_up():
    assert estimate_eta_minutes(1, 4, 2) == 1
    assert estimate_eta_minutes(1, 4, 6) == 2


@pytest.mark.parametrize("index, length, duration", [(0, 0, 10), (-1, 3, 10), (1, 3, -5)])
def test_eta_rejects_invalid_input(index, length, duration):
    with pytest.raises(ValueError):
        estimate_eta_minutes(index, length, duration)


def test_seconds_to_minutes():
    assert seconds_to_minutes(1200) == 20
    assert seconds_to_minutes(89) == 1
    assert seconds_to_minutes(90) == 2
    assert round_half_up(2.5) == 3
