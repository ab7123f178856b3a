import logging
import random

from nodevis import layout_engine, picking
from nodevis.camera import Camera
from nodevis.config import LayoutConfig
from nodevis.projection import GraphProjection

logger = logging.getLogger(__name__)


class ViewModel:
    """
    Owns the camera and the projection currently on screen, and keeps the
    projection relaxing as the graph changes underneath it.
    """

    def __init__(self, graph, config=None, rng=None, seed=None):
        self.config = config or LayoutConfig()
        self.rng = rng or random.Random(seed)
        self._camera = Camera()
        self._projection = GraphProjection()
        self.reset(graph)

    @property
    def projection(self):
        return self._projection

    def reset(self, graph):
        """Fresh full projection, relaxed before it is ever shown."""
        self._projection = GraphProjection.full(graph)
        layout_engine.simulate(self._projection, graph, self.config, self.rng,
                               self.config.warm_start_steps)
        logger.info("Layout reset: %d nodes", len(self._projection))

    def step(self, graph):
        layout_engine.simulate(self._projection, graph, self.config, self.rng,
                               self.config.frame_steps)

    def replace_projection(self, projection):
        projection.merge(self._projection)
        logger.info("Projection replaced: %d -> %d nodes",
                    len(self._projection), len(projection))
        self._projection = projection

    def place_node(self, node_id, world_pos):
        return self._projection.set(node_id, world_pos)

    def position(self, node_id):
        return self._projection.get(node_id)

    def iterate_positions(self):
        return self._projection.iterate()

    def bounding_boxes(self):
        half = self.config.node_half_extent
        return [(node_id, picking.node_box(pos, half))
                for node_id, pos in self._projection.iterate()]

    def hit_test(self, world_point):
        return picking.hit_test(self._projection, world_point, self.config.node_half_extent)

    # Camera passthrough

    def pan(self, screen_delta):
        self._camera.pan(screen_delta)

    def zoom(self, ticks):
        self._camera.zoom(ticks)

    def reset_camera(self):
        self._camera.reset()

    def view_matrix(self):
        return self._camera.view_matrix()

    def inverse_view_matrix(self):
        return self._camera.inverse_view_matrix()

    def screen_to_world(self, point):
        return self._camera.screen_to_world(point)
