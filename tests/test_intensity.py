from src.models import BoundarySet, IntensityRange
from src.intensity import evaluate, time_period

B = BoundarySet(dawn=0, sunrise=100, sunset=1000, dusk=1100)
FULL = IntensityRange(0, 100)


def test_evaluate_examples_full_range():
    assert evaluate(50, B, FULL) == 50
    assert evaluate(1050, B, FULL) == 50


def test_evaluate_example_narrow_range():
    assert evaluate(25, B, IntensityRange(20, 80)) == 35


def test_evaluate_boundary_continuity():
    for r in [FULL, IntensityRange(20, 80), IntensityRange(7, 7), IntensityRange(0, 1)]:
        assert evaluate(B.dawn, B, r) == r.min
        assert evaluate(B.sunrise, B, r) == r.max
        assert evaluate(B.sunset, B, r) == r.max
        assert evaluate(B.dusk, B, r) == r.min


def test_evaluate_night_is_minimal():
    r = IntensityRange(5, 60)
    assert evaluate(-1, B, r) == 5
    assert evaluate(-10_000, B, r) == 5
    assert evaluate(1100, B, r) == 5
    assert evaluate(50_000, B, r) == 5


def test_evaluate_within_range_and_monotonic():
    b = BoundarySet(dawn=1_700_000_000, sunrise=1_700_001_937, sunset=1_700_040_011, dusk=1_700_042_333)
    r = IntensityRange(13, 87)
    values = [evaluate(t, b, r) for t in range(b.dawn - 50, b.dusk + 50)]
    assert all(r.min <= v <= r.max for v in values)

    morning = [evaluate(t, b, r) for t in range(b.dawn, b.sunrise)]
    assert all(a <= c for a, c in zip(morning, morning[1:]))
    evening = [evaluate(t, b, r) for t in range(b.sunset, b.dusk)]
    assert all(a >= c for a, c in zip(evening, evening[1:]))


def test_evaluate_truncates():
    b = BoundarySet(dawn=0, sunrise=3, sunset=10, dusk=13)
    assert [evaluate(t, b, FULL) for t in range(0, 3)] == [0, 33, 66]
    assert [evaluate(t, b, FULL) for t in range(10, 13)] == [100, 66, 33]


def test_time_period_names():
    assert time_period(-1, B) == "nighttime before dawn"
    assert time_period(0, B) == "morning twilight"
    assert time_period(100, B) == "daytime"
    assert time_period(1000, B) == "evening twilight"
    assert time_period(1100, B) == "nighttime after dusk"
