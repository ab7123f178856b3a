from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import QTimer, Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QPainterPath, QTransform

import math

# World-space sizes
EDGE_END_GAP = 0.15
ARROW_SIZE = 0.02
STUB_LENGTH = 0.5


class GraphWidget(QWidget):
    nodeClicked = pyqtSignal(object)
    graphChanged = pyqtSignal()
    quitRequested = pyqtSignal()

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        # Rendering settings
        self.edge_color = QColor("#ffffff")
        self.stub_color = QColor("#808080")
        self.hover_color = QColor("#00bcd4") # Cyan
        self.selected_color = QColor("#ffc107")
        self.text_color = QColor("#ffffff")
        self.bg_color = QColor(26, 26, 26)

        # Interaction
        self.panning = False
        self.last_mouse_pos = QPointF()

        # Physics Timer
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.physics_loop)
        self.timer.start(16) # ~60 FPS

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def set_bg_color(self, color):
        self.bg_color = QColor(color)
        self.update()

    def physics_loop(self):
        self.controller.frame()
        self.update()

    # Coordinate mapping: pixels <-> view space (height spans [-1, 1], y up)

    def _half_height(self):
        return max(self.height(), 1) / 2

    def pixel_to_view(self, pos):
        half_h = self._half_height()
        return ((pos.x() - self.width() / 2) / half_h,
                -(pos.y() - self.height() / 2) / half_h)

    def world_transform(self):
        view = self.controller.view_model.view_matrix()

        half_h = self._half_height()
        to_pixels = QTransform(half_h, 0, 0, -half_h, self.width() / 2, self.height() / 2)
        return view * to_pixels

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Fill Background
        painter.fillRect(self.rect(), self.bg_color)

        transform = self.world_transform()
        painter.setTransform(transform)

        view_model = self.controller.view_model
        graph = self.controller.model.graph
        half = view_model.config.node_half_extent

        # Draw Edges
        pen = QPen(self.edge_color, 1)
        pen.setCosmetic(True)
        stub_pen = QPen(self.stub_color, 1)
        stub_pen.setCosmetic(True)

        for node_id, pos in view_model.iterate_positions():
            if node_id not in graph:
                continue
            for neighbor in graph.successors(node_id):
                neighbor_pos = view_model.position(neighbor)
                if neighbor_pos is None:
                    # Edge leaves the visible neighborhood
                    painter.setPen(stub_pen)
                    painter.drawLine(QPointF(pos.x, pos.y), QPointF(pos.x + STUB_LENGTH, pos.y))
                    continue

                dx = neighbor_pos.x - pos.x
                dy = neighbor_pos.y - pos.y
                dist = math.sqrt(dx*dx + dy*dy)
                if dist <= EDGE_END_GAP:
                    continue

                dx /= dist
                dy /= dist

                # Stop short of the destination node
                end_x = neighbor_pos.x - dx * EDGE_END_GAP
                end_y = neighbor_pos.y - dy * EDGE_END_GAP

                painter.setPen(pen)
                painter.drawLine(QPointF(pos.x, pos.y), QPointF(end_x, end_y))

                # Arrowhead, perpendicular vector (-dy, dx)
                base_x = end_x - dx * ARROW_SIZE
                base_y = end_y - dy * ARROW_SIZE

                path = QPainterPath()
                path.moveTo(end_x, end_y)
                path.lineTo(base_x - dy * ARROW_SIZE, base_y + dx * ARROW_SIZE)
                path.lineTo(base_x + dy * ARROW_SIZE, base_y - dx * ARROW_SIZE)
                path.closeSubpath()

                painter.fillPath(path, self.edge_color)

        # Draw Nodes
        painter.setPen(Qt.PenStyle.NoPen)
        for node_id, aabb in view_model.bounding_boxes():
            attrs = graph.nodes[node_id] if node_id in graph else {}
            r, g, b = attrs.get("color", (1.0, 1.0, 1.0))
            painter.setBrush(QBrush(QColor.fromRgbF(r, g, b)))
            painter.drawRect(QRectF(aabb.min_x, aabb.min_y, 2 * half, 2 * half))

        # Highlights
        for node_id, color in ((self.controller.hovered, self.hover_color),
                               (self.controller.selected, self.selected_color)):
            pos = view_model.position(node_id) if node_id is not None else None
            if pos is None:
                continue
            outline = QPen(color, 2)
            outline.setCosmetic(True)
            painter.setPen(outline)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(pos.x - half, pos.y - half, 2 * half, 2 * half))

        # Labels are drawn in pixel space so the text is not flipped
        painter.resetTransform()
        painter.setFont(QFont("Segoe UI", 9))
        painter.setPen(self.text_color)
        for node_id, pos in view_model.iterate_positions():
            if node_id not in graph:
                continue
            label = graph.nodes[node_id].get("label", str(node_id))
            below = transform.map(QPointF(pos.x, pos.y - half))
            painter.drawText(QRectF(below.x() - 50, below.y() + 2, 100, 20),
                             Qt.AlignmentFlag.AlignCenter, label)

    def keyPressEvent(self, event):
        view_point = self.pixel_to_view(self.last_mouse_pos)
        key = event.key()

        if key == Qt.Key.Key_Escape:
            self.quitRequested.emit()
        elif key == Qt.Key.Key_Space:
            self.controller.reset_view()
            self.graphChanged.emit()
        elif key == Qt.Key.Key_C:
            link_from = None
            if event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
                link_from = self.controller.selected
            self.controller.create_node(view_point, link_from=link_from)
            self.graphChanged.emit()
        elif key == Qt.Key.Key_F:
            if self.controller.focus_node(view_point) is not None:
                self.graphChanged.emit()
        elif key == Qt.Key.Key_A:
            self.controller.show_full_graph()
            self.graphChanged.emit()
        elif key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self.controller.zoom_in()
        elif key == Qt.Key.Key_Minus:
            self.controller.zoom_out()
        else:
            super().keyPressEvent(event)
            return

        self.update()

    def mousePressEvent(self, event):
        mouse_pos = event.position()
        self.last_mouse_pos = mouse_pos
        view_point = self.pixel_to_view(mouse_pos)

        if event.button() == Qt.MouseButton.MiddleButton:
            self.panning = True
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            return

        if event.button() == Qt.MouseButton.RightButton:
            if self.controller.delete_node(view_point) is not None:
                self.graphChanged.emit()
                self.update()
            return

        if event.button() == Qt.MouseButton.LeftButton:
            node_id = self.controller.inspect(view_point)
            if node_id is not None:
                self.setCursor(Qt.CursorShape.PointingHandCursor)
                self.nodeClicked.emit(node_id)
            self.update()

    def mouseMoveEvent(self, event):
        mouse_pos = event.position()

        if self.panning:
            half_h = self._half_height()
            delta = mouse_pos - self.last_mouse_pos
            self.controller.pan((delta.x() / half_h, -delta.y() / half_h))
        else:
            self.controller.hover(self.pixel_to_view(mouse_pos))

        self.last_mouse_pos = mouse_pos
        self.update()

    def mouseReleaseEvent(self, event):
        self.panning = False
        self.setCursor(Qt.CursorShape.ArrowCursor)

    def wheelEvent(self, event):
        # Zoom
        angle = event.angleDelta().y()
        if angle > 0:
            self.controller.zoom_in()
        elif angle < 0:
            self.controller.zoom_out()
        self.update()
