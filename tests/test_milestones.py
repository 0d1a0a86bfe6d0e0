import pytest

from climbcue.analyze.messages import FRENCH, MessageTemplates, climb_category, ClimbCategory
from climbcue.analyze.milestones import filter_by_minimum_distance, generate_milestones
from climbcue.analyze.models import Milestone, MilestoneType, Segment, Trend


def _segment(start, end, trend, start_d, end_d, start_e, end_e):
    return Segment(
        start_index=start, end_index=end, trend=trend,
        start_distance=start_d, end_distance=end_d,
        start_elevation=start_e, end_elevation=end_e,
    )


def _milestone(distance, kind=MilestoneType.CLIMB):
    return Milestone(
        trail_id=1, point_index=int(distance // 50), latitude=45.0, longitude=6.0,
        elevation=1000.0, distance=distance, type=kind, message="",
    )


def test_long_climb_message(points_factory):
    pts = points_factory([1000.0] * 50)
    seg = _segment(2, 42, Trend.CLIMBING, 100.0, 2100.0, 1000.0, 1150.7)

    [m] = generate_milestones([seg], pts, trail_id=42)

    assert m.message == "Montée de 150 mètres sur 2.0 kilomètres — 7% moyen"
    assert m.type is MilestoneType.CLIMB
    assert (m.trail_id, m.point_index, m.distance) == (42, 2, 100.0)
    assert (m.latitude, m.longitude, m.elevation) == (pts[2].latitude, pts[2].longitude, pts[2].elevation)
    assert m.id is None and m.name is None


def test_short_climb_message_in_meters(points_factory):
    pts = points_factory([0.0] * 20)
    seg = _segment(0, 16, Trend.CLIMBING, 0.0, 800.0, 0.0, 80.9)

    [m] = generate_milestones([seg], pts, trail_id=0)

    assert m.message == "Montée de 80 mètres sur 800 mètres — 10% moyen"


def test_descent_messages(points_factory):
    pts = points_factory([0.0] * 60)
    long_descent = _segment(10, 40, Trend.DESCENDING, 500.0, 2000.0, 1000.0, 880.4)
    short_descent = _segment(50, 59, Trend.DESCENDING, 2500.0, 3000.0, 1000.0, 910.0)

    ms = generate_milestones([long_descent, short_descent], pts, trail_id=0)

    assert [m.message for m in ms] == [
        "Descente de 119 mètres sur 1.5 kilomètres",
        "Descente de 90 mètres sur 500 mètres",
    ]
    assert all(m.type is MilestoneType.DESCENT for m in ms)


def test_flat_segments_produce_nothing(points_factory):
    pts = points_factory([0.0] * 10)
    seg = _segment(0, 9, Trend.FLAT, 0.0, 450.0, 0.0, 0.0)
    assert generate_milestones([seg], pts, trail_id=0) == []


def test_output_sorted_by_anchor_distance(points_factory):
    pts = points_factory([0.0] * 100)
    later = _segment(60, 80, Trend.CLIMBING, 3000.0, 4000.0, 0.0, 100.0)
    earlier = _segment(10, 30, Trend.DESCENDING, 500.0, 1500.0, 100.0, 0.0)

    ms = generate_milestones([later, earlier], pts, trail_id=0)

    assert [m.point_index for m in ms] == [10, 60]


def test_custom_templates(points_factory):
    english = MessageTemplates(
        climb_km="Climb of {gain} m over {km:.1f} km, {slope}% average",
        climb_m="Climb of {gain} m over {meters} m, {slope}% average",
        descent_km="Descent of {gain} m over {km:.1f} km",
        descent_m="Descent of {gain} m over {meters} m",
    )
    pts = points_factory([0.0] * 50)
    seg = _segment(2, 42, Trend.CLIMBING, 100.0, 2100.0, 1000.0, 1150.7)

    [m] = generate_milestones([seg], pts, trail_id=0, templates=english)

    assert m.message == "Climb of 150 m over 2.0 km, 7% average"
    assert FRENCH.climb_km.startswith("Montée")


def test_filter_keeps_earlier_of_close_milestones():
    ms = [_milestone(d) for d in (0.0, 500.0, 999.0, 1000.0, 1999.9, 3000.0)]

    kept = filter_by_minimum_distance(ms, 1000.0)

    assert [m.distance for m in kept] == [0.0, 1000.0, 3000.0]


def test_filter_always_keeps_first_and_handles_empty():
    assert filter_by_minimum_distance([], 1000.0) == []
    assert [m.distance for m in filter_by_minimum_distance([_milestone(200.0)], 1000.0)] == [200.0]


def test_filter_with_zero_spacing_keeps_everything():
    ms = [_milestone(d) for d in (0.0, 0.0, 10.0)]
    assert filter_by_minimum_distance(ms, 0.0) == ms


def test_milestone_to_dict():
    d = _milestone(1200.0, MilestoneType.DESCENT).to_dict()
    assert d["type"] == "descent"
    assert d["distance"] == 1200.0
    assert d["id"] is None


@pytest.mark.parametrize(
    "gain, expected",
    [
        (1000, ClimbCategory.HC),
        (999, ClimbCategory.CAT1),
        (600, ClimbCategory.CAT1),
        (300, ClimbCategory.CAT2),
        (150, ClimbCategory.CAT3),
        (149, ClimbCategory.CAT4),
        (0, ClimbCategory.CAT4),
    ],
)
def test_climb_category(gain, expected):
    assert climb_category(gain) is expected


def test_climb_category_short_names():
    assert ClimbCategory.HC.short_name == "HC"
    assert ClimbCategory.CAT2.short_name == "Cat 2"
