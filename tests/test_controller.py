"""Tests for Controller: user intents routed to the model and the view."""

import pytest
from PyQt6.QtCore import QPointF

from nodevis.controller import Controller
from nodevis.geometry import Vec2
from nodevis.model import Model


@pytest.fixture
def controller(demo_model, config):
    return Controller(demo_model, config=config, seed=21)


def view_point_of(controller, node_id):
    pos = controller.view_model.position(node_id)
    mapped = controller.view_model.view_matrix().map(QPointF(pos.x, pos.y))
    return (mapped.x(), mapped.y())


class TestCreateDelete:
    def test_create_places_node_under_pointer(self, controller):
        before = dict(controller.view_model.iterate_positions())

        node_id = controller.create_node((0.7, -0.4))

        assert node_id in controller.model.graph
        assert controller.view_model.position(node_id) == pytest.approx(Vec2(0.7, -0.4))
        for other, pos in before.items():
            assert controller.view_model.position(other) == pos

    def test_create_respects_camera(self, controller):
        controller.zoom_out()
        controller.zoom_out()
        controller.zoom_out()  # scale factor 2
        controller.pan((-0.5, 0.0))  # camera moves to x = +1

        node_id = controller.create_node((0.5, 0.5))

        assert controller.view_model.position(node_id) == pytest.approx(Vec2(2.0, 1.0))

    def test_create_linked_node(self, controller, demo_model):
        parent = next(iter(demo_model.graph))

        child = controller.create_node((0.0, 0.0), link_from=parent)

        assert demo_model.graph.has_edge(parent, child)

    def test_delete_node_under_pointer(self, controller, demo_model):
        victim = next(iter(demo_model.graph))
        survivors = {n: p for n, p in controller.view_model.iterate_positions() if n != victim}

        deleted = controller.delete_node(view_point_of(controller, victim))

        assert deleted == victim
        assert victim not in demo_model.graph
        assert controller.view_model.position(victim) is None
        for node_id, pos in survivors.items():
            assert controller.view_model.position(node_id) == pos

    def test_delete_on_empty_space(self, controller, demo_model):
        count = demo_model.graph.number_of_nodes()

        assert controller.delete_node((50.0, 50.0)) is None
        assert demo_model.graph.number_of_nodes() == count

    def test_create_after_delete_does_not_inherit_position(self, config):
        model = Model()
        model.add_node()
        controller = Controller(model, config=config, seed=2)
        old = next(iter(model.graph))
        controller.delete_node(view_point_of(controller, old))

        new = controller.create_node((0.9, 0.9))

        assert new.index == old.index
        assert controller.view_model.position(new) == pytest.approx(Vec2(0.9, 0.9))
        assert controller.view_model.position(old) is None


class TestFocus:
    def test_focus_shows_neighborhood(self, controller, demo_model):
        graph = demo_model.graph
        center = next(n for n in graph if graph.nodes[n]["label"] == "2")

        assert controller.focus_node(view_point_of(controller, center)) == center

        shown = {n for n, _ in controller.view_model.projection}
        assert shown == {center} | set(graph.predecessors(center)) | set(graph.successors(center))

    def test_show_full_graph(self, controller, demo_model):
        center = next(iter(demo_model.graph))
        controller.focus_node(view_point_of(controller, center))

        controller.show_full_graph()

        assert controller.focus is None
        assert {n for n, _ in controller.view_model.projection} == set(demo_model.graph.nodes)

    def test_deleting_focus_returns_to_full_graph(self, controller, demo_model):
        center = next(iter(demo_model.graph))
        controller.focus_node(view_point_of(controller, center))

        controller.delete_node(view_point_of(controller, center))

        assert controller.focus is None
        assert {n for n, _ in controller.view_model.projection} == set(demo_model.graph.nodes)

    def test_unlinked_create_while_focused_shows_everything(self, controller, demo_model):
        center = next(iter(demo_model.graph))
        controller.focus_node(view_point_of(controller, center))

        node_id = controller.create_node((3.0, 3.0))

        assert controller.focus is None
        assert node_id in controller.view_model.projection


class TestInspect:
    def test_inspect_and_hover(self, controller, demo_model):
        node_id = next(iter(demo_model.graph))
        point = view_point_of(controller, node_id)

        assert controller.inspect(point) == node_id
        assert controller.selected == node_id
        assert controller.hover(point) == node_id
        assert controller.hover((50.0, 50.0)) is None

    def test_reset_view(self, controller, demo_model):
        controller.zoom_in()
        controller.pan((0.3, 0.3))

        controller.reset_view()

        view = controller.view_model.view_matrix()
        entries = (view.m11(), view.m12(), view.m21(), view.m22(), view.dx(), view.dy())
        assert entries == pytest.approx((1.0, 0.0, 0.0, 1.0, 0.0, 0.0))
        assert controller.view_model.screen_to_world((0.0, 0.0)) == pytest.approx(Vec2(0.0, 0.0))

    def test_frame_steps_layout(self, controller, demo_model):
        new_id = controller.create_node((0.0, 0.0))
        controller.frame()

        assert {n for n, _ in controller.view_model.projection} == set(demo_model.graph.nodes)
        assert new_id in controller.view_model.projection

    def test_load_model(self, controller, chain):
        model, a, b, c = chain

        controller.load_model(model)

        assert controller.model is model
        assert {n for n, _ in controller.view_model.projection} == {a, b, c}
