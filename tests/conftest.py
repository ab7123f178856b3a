import random

import pytest

from nodevis.config import LayoutConfig
from nodevis.model import Model, new_model


@pytest.fixture
def config():
    return LayoutConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def chain():
    """A -> B -> C, returned as (model, a, b, c)."""
    model = Model()
    a = model.add_node(label="A")
    b = model.add_node(label="B")
    c = model.add_node(label="C")
    model.add_edge(a, b)
    model.add_edge(b, c)
    return model, a, b, c


@pytest.fixture
def demo_model():
    return new_model()
