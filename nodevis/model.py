import logging
import os
from typing import NamedTuple

import networkx as nx

logger = logging.getLogger(__name__)

INCOMING = "incoming"
OUTGOING = "outgoing"

DEFAULT_COLOR = (1.0, 0.0, 1.0)


class NodeId(NamedTuple):
    """Slot index plus the generation of that slot when the node was created."""
    index: int
    generation: int

    def __str__(self):
        return f"{self.index}v{self.generation}"


class Model:
    def __init__(self):
        self.graph = nx.DiGraph()
        self._generations = []  # slot index -> current generation
        self._free = []  # released slot indices

    def add_node(self, color=None, label=None):
        if self._free:
            index = self._free.pop()
        else:
            index = len(self._generations)
            self._generations.append(0)

        node_id = NodeId(index, self._generations[index])
        self.graph.add_node(
            node_id,
            color=tuple(color) if color is not None else DEFAULT_COLOR,
            label=label if label is not None else str(node_id),
        )
        return node_id

    def remove_node(self, node_id):
        if node_id not in self.graph:
            logger.warning("Ignoring removal of unknown node %s", node_id)
            return False

        self.graph.remove_node(node_id)
        # Retire the slot so the old id can never match a future node
        self._generations[node_id.index] += 1
        self._free.append(node_id.index)
        return True

    def add_edge(self, source, target):
        if source not in self.graph or target not in self.graph:
            logger.warning("Ignoring edge %s -> %s with a missing end", source, target)
            return False
        self.graph.add_edge(source, target)
        return True

    def node(self, node_id):
        if node_id not in self.graph:
            return None
        return self.graph.nodes[node_id]

    def callers(self, node_id):
        if node_id not in self.graph:
            return []
        return list(self.graph.predecessors(node_id))

    def callees(self, node_id):
        if node_id not in self.graph:
            return []
        return list(self.graph.successors(node_id))

    @classmethod
    def from_networkx(cls, nx_graph):
        model = cls()
        ids = {}

        if not nx_graph.is_directed():
            # Undirected edges become a pair of opposite directed edges
            nx_graph = nx_graph.to_directed()

        for n, data in nx_graph.nodes(data=True):
            ids[n] = model.add_node(color=_parse_color(data.get("color")), label=str(n))

        for u, v in nx_graph.edges():
            model.add_edge(ids[u], ids[v])

        logger.info("Imported graph: %d nodes, %d edges",
                    model.graph.number_of_nodes(), model.graph.number_of_edges())
        return model


def externals(graph, direction):
    """Nodes with no edges in the given direction: sources for INCOMING, sinks for OUTGOING."""
    if direction == INCOMING:
        degrees = graph.in_degree()
    elif direction == OUTGOING:
        degrees = graph.out_degree()
    else:
        raise ValueError(f"Unknown direction: {direction!r}")
    return [n for n, degree in degrees if degree == 0]


def _parse_color(value):
    """Accepts an RGB float triple or a '#rrggbb' string."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) != 6:
            return None
        try:
            return tuple(int(text[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        except ValueError:
            return None
    try:
        r, g, b = value
    except (TypeError, ValueError):
        return None
    return (float(r), float(g), float(b))


def load_graph_file(path):
    """Reads a graph through networkx; the reader is picked from the file suffix."""
    suffix = os.path.splitext(path)[1].lower()

    if suffix == ".graphml":
        nx_graph = nx.read_graphml(path)
    elif suffix == ".gml":
        nx_graph = nx.read_gml(path)
    elif suffix in (".edgelist", ".txt"):
        nx_graph = nx.read_edgelist(path, create_using=nx.DiGraph)
    else:
        raise ValueError(f"Unsupported graph file type: {suffix or path}")

    logger.info("Loaded %s", os.path.basename(path))
    return Model.from_networkx(nx_graph)


def new_model():
    """Small demo graph: one input feeding two outputs through a few inner nodes."""
    model = Model()

    node_in = model.add_node(color=(1.0, 1.0, 1.0), label="in")
    node_out_1 = model.add_node(color=(0.5, 0.5, 0.5), label="out 1")
    node_out_2 = model.add_node(color=(0.2, 0.2, 0.2), label="out 2")

    node_0 = model.add_node(color=(1.0, 0.5, 0.5), label="0")
    node_1 = model.add_node(color=(0.5, 1.0, 0.5), label="1")
    node_2 = model.add_node(color=(0.5, 0.5, 1.0), label="2")
    node_3 = model.add_node(color=(0.5, 1.0, 1.0), label="3")
    node_4 = model.add_node(color=(0.5, 1.0, 1.0), label="4")

    model.add_edge(node_in, node_0)
    model.add_edge(node_in, node_1)
    model.add_edge(node_in, node_4)
    model.add_edge(node_0, node_out_1)
    model.add_edge(node_1, node_2)
    model.add_edge(node_2, node_3)
    model.add_edge(node_3, node_out_1)
    model.add_edge(node_4, node_out_1)
    model.add_edge(node_0, node_out_2)

    return model
