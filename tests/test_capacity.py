from eventhub.domain import capacity


def test_available_seats_counts_down_from_capacity():
    assert capacity.available_seats(10, 0) == 10
    assert capacity.available_seats(10, 7) == 3
    assert not capacity.is_full(10, 9)


def test_event_is_full_at_capacity():
    assert capacity.available_seats(10, 10) == 0
    assert capacity.is_full(10, 10)


def test_overfilled_event_is_full_and_displays_zero():
    assert capacity.available_seats(5, 7) == -2
    assert capacity.is_full(5, 7)
    assert capacity.displayed_seats(5, 7) == 0
