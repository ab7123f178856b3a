from typing import NamedTuple


class Vec2(NamedTuple):
    x: float
    y: float


ORIGIN = Vec2(0.0, 0.0)


class Aabb2(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def around_point(cls, center, half_extent):
        return cls(center.x - half_extent, center.y - half_extent,
                   center.x + half_extent, center.y + half_extent)

    def contains_point(self, point):
        # Edges count as inside
        return (self.min_x <= point.x <= self.max_x
                and self.min_y <= point.y <= self.max_y)
