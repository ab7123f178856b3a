import networkx as nx

from nodevis.geometry import ORIGIN, Vec2


class GraphProjection:
    """Layout positions for the nodes currently on screen."""

    def __init__(self, positions=None):
        self._positions = dict(positions or {})

    @classmethod
    def from_nodes(cls, node_ids):
        return cls((node_id, ORIGIN) for node_id in node_ids)

    @classmethod
    def full(cls, graph):
        """Every node of the graph, all at the origin."""
        return cls.from_nodes(graph.nodes)

    @classmethod
    def induced(cls, graph, center, radius):
        """
        Nodes within `radius` hops of `center`, following edges either way.
        Empty when `center` is not in the graph.
        """
        if center not in graph:
            return cls()

        neighborhood = nx.ego_graph(graph, center, radius=radius, undirected=True)
        return cls.from_nodes(neighborhood.nodes)

    def merge(self, previous):
        """Copies over positions of nodes that `previous` already placed."""
        for node_id in self._positions:
            old = previous.get(node_id)
            if old is not None:
                self._positions[node_id] = old
        return self

    def get(self, node_id):
        return self._positions.get(node_id)

    def set(self, node_id, position):
        if node_id not in self._positions:
            return False
        self._positions[node_id] = Vec2(*position)
        return True

    def update(self, node_id, fn):
        if node_id not in self._positions:
            return False
        self._positions[node_id] = Vec2(*fn(self._positions[node_id]))
        return True

    def iterate(self):
        return iter(list(self._positions.items()))

    def __iter__(self):
        return self.iterate()

    def __len__(self):
        return len(self._positions)

    def __contains__(self, node_id):
        return node_id in self._positions

    def __repr__(self):
        return f"GraphProjection({len(self._positions)} nodes)"
