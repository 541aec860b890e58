from datetime import datetime

from medcare.core.scheduling import second_of_day, within_window


def test_second_of_day():
    assert second_of_day(datetime(2024, 1, 15, 0, 0)) == 0
    assert second_of_day(datetime(2024, 1, 15, 9, 30, 15)) == 34215


def test_within_window_is_symmetric():
    a = datetime(2024, 1, 15, 9, 0)
    b = datetime(2024, 1, 15, 9, 20)
    assert within_window(a, b) and within_window(b, a)


def test_within_window_edges():
    a = datetime(2024, 1, 15, 9, 0)
    assert not within_window(a, datetime(2024, 1, 15, 9, 30))
    assert within_window(a, datetime(2024, 1, 15, 9, 29, 59))
    assert not within_window(a, None)
    assert not within_window(None, None)
    assert not within_window(a, datetime(2024, 1, 16, 9, 0))
    assert within_window(a, datetime(2024, 1, 15, 9, 5), window_seconds=600)
