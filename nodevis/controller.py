import logging

from nodevis.projection import GraphProjection
from nodevis.view_model import ViewModel

logger = logging.getLogger(__name__)


class Controller:
    """
    Turns user intents into model edits and view updates.

    Pointer positions are in view space (x right, y up, the window height
    spanning [-1, 1]); the widget is responsible for converting from pixels.
    """

    def __init__(self, model, view_model=None, config=None, seed=None):
        self.model = model
        self.view_model = view_model or ViewModel(model.graph, config=config, seed=seed)
        self.focus = None
        self.selected = None
        self.hovered = None

    @property
    def config(self):
        return self.view_model.config

    def _world(self, view_point):
        return self.view_model.screen_to_world(view_point)

    def _build_projection(self):
        if self.focus is not None:
            return GraphProjection.induced(self.model.graph, self.focus, self.config.focus_radius)
        return GraphProjection.full(self.model.graph)

    def node_at(self, view_point):
        return self.view_model.hit_test(self._world(view_point))

    def create_node(self, view_point, link_from=None, color=None):
        world_pos = self._world(view_point)

        node_id = self.model.add_node(color=color)
        if link_from is not None:
            self.model.add_edge(link_from, node_id)

        projection = self._build_projection()
        if node_id not in projection:
            # Not reachable from the focus; fall back to the whole graph
            self.focus = None
            projection = GraphProjection.full(self.model.graph)

        self.view_model.replace_projection(projection)
        self.view_model.place_node(node_id, world_pos)
        logger.info("Created node %s at (%.2f, %.2f)", node_id, world_pos.x, world_pos.y)
        return node_id

    def delete_node(self, view_point):
        node_id = self.node_at(view_point)
        if node_id is None:
            return None

        self.model.remove_node(node_id)
        if self.focus == node_id:
            self.focus = None
        if self.selected == node_id:
            self.selected = None
        if self.hovered == node_id:
            self.hovered = None

        self.view_model.replace_projection(self._build_projection())
        logger.info("Deleted node %s", node_id)
        return node_id

    def focus_node(self, view_point):
        node_id = self.node_at(view_point)
        if node_id is None:
            return None

        self.focus = node_id
        self.view_model.replace_projection(self._build_projection())
        logger.info("Focused on %s (radius %d)", node_id, self.config.focus_radius)
        return node_id

    def show_full_graph(self):
        self.focus = None
        self.view_model.replace_projection(self._build_projection())

    def inspect(self, view_point):
        self.selected = self.node_at(view_point)
        return self.selected

    def hover(self, view_point):
        self.hovered = self.node_at(view_point)
        return self.hovered

    def reset_view(self):
        self.focus = None
        self.view_model.reset(self.model.graph)
        self.view_model.reset_camera()

    def load_model(self, model):
        self.model = model
        self.focus = None
        self.selected = None
        self.hovered = None
        self.reset_view()

    def zoom_in(self):
        self.view_model.zoom(1)

    def zoom_out(self):
        self.view_model.zoom(-1)

    def pan(self, view_delta):
        self.view_model.pan(view_delta)

    def frame(self):
        self.view_model.step(self.model.graph)
