from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QTransform

from nodevis.geometry import ORIGIN, Vec2


class Camera:
    """
    Pan/zoom state. View space has y up and spans [-1, 1] vertically at
    zoom 0; world space is where the layout lives.
    """

    def __init__(self, pan_speed=1.0):
        self.position = ORIGIN
        self.pan_speed = pan_speed
        # Zoom is kept as whole ticks so zooming in and out again is exact
        self._zoom_ticks = 0

    @property
    def zoom_level(self):
        return -self._zoom_ticks / 3.0

    def scale_factor(self):
        return 2.0 ** self.zoom_level

    def pan(self, screen_delta):
        # Drags the content: the world point under the cursor follows it
        scale = self.scale_factor() * self.pan_speed
        self.position = Vec2(self.position.x - screen_delta[0] * scale,
                             self.position.y - screen_delta[1] * scale)

    def zoom(self, ticks):
        self._zoom_ticks += int(ticks)

    def reset(self):
        self.position = ORIGIN
        self._zoom_ticks = 0

    def view_matrix(self):
        # Translate by -pan first, then scale
        scale = 1.0 / self.scale_factor()
        return (QTransform.fromTranslate(-self.position.x, -self.position.y)
                * QTransform.fromScale(scale, scale))

    def inverse_view_matrix(self):
        inverse, _invertible = self.view_matrix().inverted()
        return inverse

    def screen_to_world(self, point):
        mapped = self.inverse_view_matrix().map(QPointF(point[0], point[1]))
        return Vec2(mapped.x(), mapped.y())
