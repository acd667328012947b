"""graph.py - Named Directed Graphs"""
from __future__ import annotations

import typing as typ
from dataclasses import dataclass
from enum import Enum

import networkx as nx

from frame_semantics.config import DEFAULT_CONFIG

__all__ = ['Vertex', 'Edge', 'FrameType', 'FrameGraph', 'NamedGraph',
           'KinematicGraph', 'FrameAttachedToGraph', 'PoseRelativeToGraph']

# %% Primitives
@dataclass(frozen=True)
class Vertex:
    """Graph vertex view

    :param id: Vertex id
    :type id: int

    :param name: Vertex name
    :type name: str

    :param payload: Opaque vertex data, defaults to None
    :type payload: typing.Any, optional
    """
    id: int
    name: str
    payload: typ.Any = None

@dataclass(frozen=True)
class Edge:
    """Directed graph edge view

    :param tail: Tail vertex id
    :type tail: int

    :param head: Head vertex id
    :type head: int

    :param payload: Opaque edge data, defaults to None
    :type payload: typing.Any, optional
    """
    tail: int
    head: int
    payload: typ.Any = None

class FrameType(Enum):
    """Kind of entity a frame graph vertex represents"""
    MODEL = 'model'
    LINK  = 'link'
    JOINT = 'joint'
    FRAME = 'frame'

class FrameGraph(nx.MultiDiGraph):
    """Directed multigraph of named vertices keyed by integer ids. Parallel
    edges are kept so every inserted edge is enumerated."""
    def __init__(self, incoming_graph_data = None, **attr):
        """Initialize FrameGraph"""
        super().__init__(incoming_graph_data, **attr)
        self._next_id: int = max(self.nodes, default=-1) + 1

    # Insertion
    def add_vertex(self, name: str, payload: typ.Any = None) -> int:
        """Adds a vertex with a newly assigned id

        :param name: Vertex name
        :type name: str

        :param payload: Vertex data, defaults to None
        :type payload: typing.Any, optional

        :return: Vertex id
        :rtype: int
        """
        vid = self._next_id
        self._next_id += 1
        self.add_node(vid, name=name, payload=payload)
        return vid

    def add_directed_edge(self, tail: int, head: int, payload: typ.Any = None) -> Edge:
        """Adds a directed edge between two existing vertices

        :param tail: Tail vertex id
        :type tail: int

        :param head: Head vertex id
        :type head: int

        :param payload: Edge data, defaults to None
        :type payload: typing.Any, optional

        :raises KeyError: If either vertex id is not present

        :return: Inserted edge
        :rtype: Edge
        """
        for vid in (tail, head):
            if vid not in self:
                raise KeyError(f"Vertex {vid} is not present")

        self.add_edge(tail, head, payload=payload)
        return Edge(tail, head, payload)

    # Lookup
    def vertex(self, vid: int) -> Vertex:
        """Returns vertex view by id

        :param vid: Vertex id
        :type vid: int

        :raises KeyError: If vertex id is not present

        :return: Vertex
        :rtype: Vertex
        """
        data = self.nodes[vid]
        return Vertex(vid, data['name'], data['payload'])

    def vertices(self) -> list[Vertex]:
        """Returns all vertices in insertion order"""
        return [self.vertex(vid) for vid in self.nodes]

    def directed_edges(self) -> list[Edge]:
        """Returns all edges"""
        return [Edge(u, v, p) for u, v, p in self.edges(data='payload')]

    def outgoing(self, vid: int) -> list[Edge]:
        """Returns edges whose tail is the vertex"""
        return [Edge(u, v, p) for u, v, p in self.out_edges(vid, data='payload')]

    def incoming(self, vid: int) -> list[Edge]:
        """Returns edges whose head is the vertex"""
        return [Edge(u, v, p) for u, v, p in self.in_edges(vid, data='payload')]

    def incident(self, vid: int) -> list[Edge]:
        """Returns edges touching the vertex, incoming first"""
        return self.incoming(vid) + self.outgoing(vid)

    def sinks(self) -> list[int]:
        """Returns ids of vertices without outgoing edges"""
        return [vid for vid in self.nodes if self.out_degree(vid) == 0]

# %% Named Graphs
class NamedGraph():
    """Frame graph paired with its name to vertex id map

    :param model_frame: Reserved name of the implicit model frame, defaults to configured value
    :type model_frame: str, optional
    """
    kind: str = 'NamedGraph'

    def __init__(self, model_frame: str = DEFAULT_CONFIG.model_frame):
        """Initialize NamedGraph"""
        self.graph = FrameGraph()
        self.map: dict[str, int] = {}
        self.model_frame = model_frame

    def add_vertex(self, name: str, payload: typ.Any = None) -> int:
        """Adds a vertex and registers its name

        :param name: Vertex name
        :type name: str

        :param payload: Vertex data, defaults to None
        :type payload: typing.Any, optional

        :return: Vertex id
        :rtype: int
        """
        vid = self.graph.add_vertex(name, payload)
        self.map[name] = vid
        return vid

    def find(self, name: str) -> Vertex | None:
        """Returns vertex registered under name, if any"""
        vid = self.map.get(name)
        return None if vid is None else self.graph.vertex(vid)

    def count(self, name: str) -> int:
        """Returns number of vertices carrying name"""
        return sum(1 for v in self.graph.vertices() if v.name == name)

    def name(self, vid: int) -> str:
        return self.graph.vertex(vid).name

    def __contains__(self, name: str) -> bool:
        return name in self.map

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __repr__(self) -> str:
        return "{}({} vertices, {} edges)".format(
            self.kind, self.graph.number_of_nodes(), self.graph.number_of_edges())

class KinematicGraph(NamedGraph):
    """Links as vertices, joints as edges from child link to parent link"""
    kind = 'KinematicGraph'

class FrameAttachedToGraph(NamedGraph):
    """Edges point from a frame toward the frame it is attached to"""
    kind = 'FrameAttachedToGraph'

class PoseRelativeToGraph(NamedGraph):
    """Edges point from a frame toward the frame its pose is expressed in"""
    kind = 'PoseRelativeToGraph'
