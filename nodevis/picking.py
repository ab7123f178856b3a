from nodevis.geometry import Aabb2, Vec2


def node_box(position, half_extent):
    return Aabb2.around_point(position, half_extent)


def hit_test(projection, point, half_extent):
    """
    Returns the node under `point`, or None.

    When boxes overlap, the node whose center is nearest the point wins;
    exact ties go to the node that comes first in projection order.
    """
    point = Vec2(*point)
    best = None
    best_dist_sq = None

    for node_id, pos in projection.iterate():
        if not node_box(pos, half_extent).contains_point(point):
            continue

        dx = pos.x - point.x
        dy = pos.y - point.y
        dist_sq = dx*dx + dy*dy
        if best is None or dist_sq < best_dist_sq:
            best = node_id
            best_dist_sq = dist_sq

    return best
