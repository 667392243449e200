from collections import namedtuple

import igraph as ig
import numpy as np

__all__ = ['Node', 'SearchTree']


Node = namedtuple('Node', ['index', 'position', 'parent', 'children'])


class SearchTree():

    """
    Node storage for a single planning session.

    Positions are kept in a numpy buffer that doubles when full and parent/children links in index-addressed
    lists, so an insert does not depend on the size of the tree. Nodes are only ever appended, which keeps indices
    stable for the lifetime of the session. to_graph() exports the tree as a directed igraph Graph with a
    'position' vertex attribute and parent -> child edges.

    Args:
        capacity (int, optional): Initial number of node slots. Defaults to 1024.
    """

    def __init__(self, capacity=1024):
        self._positions = np.empty((max(int(capacity), 1), 3))
        self._parents = []
        self._children = []
        self.root = None

    def __len__(self):
        return len(self._parents)

    def add_root(self, position):
        if self.root is not None:
            raise ValueError("Tree already has a root node.")
        self.root = self._append(position, None)
        return self.root

    def add_node(self, position, parent):
        """
        Appends a node as the child of parent.

        Args:
            position (array-like): 1x3 position.
            parent (int): Index of an existing node.

        Returns:
            int: Index of the new node.
        """
        if parent < 0 or parent >= len(self):
            raise IndexError("No node with index {}".format(parent))
        idx = self._append(position, parent)
        self._children[parent].append(idx)
        return idx

    def position(self, idx):
        if idx < 0 or idx >= len(self):
            raise IndexError("No node with index {}".format(idx))
        position = self._positions[idx].copy()
        position.setflags(write=False)
        return position

    def parent(self, idx):
        return self._parents[idx]

    def children(self, idx):
        return list(self._children[idx])

    def node(self, idx):
        return Node(idx, self.position(idx), self.parent(idx), self.children(idx))

    def nodes(self):
        for idx in range(len(self)):
            yield self.node(idx)

    def positions(self):
        positions = self._positions[:len(self)]
        positions.setflags(write=False)
        return positions

    def nearest(self, point):
        """
        Index of the node closest to point.
        """
        dists = np.linalg.norm(self.positions() - np.asarray(point, dtype=float), axis=1)
        return int(np.argmin(dists))

    def to_graph(self):
        """
        Builds a directed igraph Graph of the current tree in one batch.

        Returns:
            igraph.Graph: Vertex i is node i with its 'position' attribute; each edge runs parent -> child.
        """
        graph = ig.Graph(directed=True)
        graph.add_vertices(len(self))
        if len(self) > 0:
            graph.vs['position'] = [self.position(idx) for idx in range(len(self))]
        graph.add_edges([(parent, idx) for idx, parent in enumerate(self._parents) if parent is not None])
        return graph

    def _append(self, position, parent):
        idx = len(self)
        if idx == self._positions.shape[0]:
            grown = np.empty((2 * idx, 3))
            grown[:idx] = self._positions
            self._positions = grown
        self._positions[idx] = np.asarray(position, dtype=float)
        self._parents.append(parent)
        self._children.append([])
        return idx
