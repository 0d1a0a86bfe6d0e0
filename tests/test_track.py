import pytest

from climbcue.analyze.models import RawPoint
from climbcue.analyze.track import load_track, parse_track, summarize_track
from climbcue.errors import NotEnoughPointsError, TrackError
from climbcue.util.geomath import distance_meters


@pytest.mark.parametrize("raw", [[], [RawPoint(45.0, 6.0, 1000.0)]])
def test_parse_needs_two_points(raw):
    with pytest.raises(NotEnoughPointsError):
        parse_track(raw)


def test_not_enough_points_is_a_track_error():
    assert issubclass(NotEnoughPointsError, TrackError)


def test_parse_two_points():
    a = RawPoint(45.0, 6.0, 1000.0)
    b = RawPoint(45.001, 6.0, 1012.7)

    track = parse_track([a, b])

    assert [p.index for p in track.points] == [0, 1]
    assert track.points[0].cumulative_distance == 0.0
    assert track.points[1].cumulative_distance == distance_meters((45.0, 6.0), (45.001, 6.0))
    assert track.total_elevation_gain == 12


def test_gain_truncates_each_positive_step():
    # steps: +0.9, +0.9, -0.8, +1.5 -> 0 + 0 + 1 (not int(3.3) == 3)
    eles = [100.0, 100.9, 101.8, 101.0, 102.5]
    raw = [RawPoint(45.0 + i * 0.001, 6.0, e) for i, e in enumerate(eles)]

    assert parse_track(raw).total_elevation_gain == 1


def test_cumulative_distance_never_decreases():
    raw = [RawPoint(45.0, 6.0, 0.0), RawPoint(45.0, 6.0, 0.0), RawPoint(45.01, 6.01, 0.0), RawPoint(45.0, 6.0, 0.0)]
    dists = [p.cumulative_distance for p in parse_track(raw).points]

    assert dists[0] == dists[1] == 0.0
    assert dists == sorted(dists)
    assert dists[3] == pytest.approx(2 * dists[2])


def test_load_and_summarize_sample(sample_gpx_path):
    track = load_track(sample_gpx_path)
    summary = summarize_track(track)

    assert summary.points == 5
    assert summary.elevation_gain_m == 25   # int(10.5) + int(15.4)
    assert summary.distance_m == pytest.approx(444.8, abs=1.0)
    assert summary.min_elevation_m == 0.0
    assert summary.max_elevation_m == 1025.9


def test_parsed_points_are_immutable():
    track = parse_track([RawPoint(45.0, 6.0, 100.0), RawPoint(45.001, 6.0, 110.0)])
    assert isinstance(track.points, tuple)
    with pytest.raises(AttributeError):
        track.points.append(track.points[0])
