from nodevis.geometry import Vec2
from nodevis.picking import hit_test, node_box
from nodevis.projection import GraphProjection

HALF = 0.125


def test_hit_at_node_center():
    projection = GraphProjection({"a": Vec2(1.0, 1.0), "b": Vec2(-1.0, 0.0)})

    assert hit_test(projection, (1.0, 1.0), HALF) == "a"
    assert hit_test(projection, (-1.0, 0.0), HALF) == "b"


def test_miss_outside_every_box():
    projection = GraphProjection({"a": Vec2(1.0, 1.0), "b": Vec2(-1.0, 0.0)})

    assert hit_test(projection, (0.0, 0.0), HALF) is None
    assert hit_test(projection, (1.0 + HALF + 0.001, 1.0), HALF) is None


def test_box_edge_counts_as_hit():
    projection = GraphProjection({"a": Vec2(0.0, 0.0)})

    assert hit_test(projection, (HALF, -HALF), HALF) == "a"


def test_overlap_prefers_nearest_center():
    projection = GraphProjection({"a": Vec2(0.0, 0.0), "b": Vec2(0.1, 0.0)})

    assert hit_test(projection, (0.09, 0.0), HALF) == "b"
    assert hit_test(projection, (0.01, 0.0), HALF) == "a"


def test_exact_tie_goes_to_first_in_order():
    projection = GraphProjection({"b": Vec2(0.1, 0.0), "a": Vec2(-0.1, 0.0)})

    assert hit_test(projection, (0.0, 0.0), HALF) == "b"


def test_empty_projection():
    assert hit_test(GraphProjection(), (0.0, 0.0), HALF) is None


def test_node_box():
    box = node_box(Vec2(1.0, 2.0), 0.5)

    assert (box.min_x, box.min_y, box.max_x, box.max_y) == (0.5, 1.5, 1.5, 2.5)
