"""validation.py - Shared Frame Graph Checks and Traversal"""
from __future__ import annotations

import networkx as nx

from frame_semantics.errors import ErrorCode, ErrorKind, FrameSemanticsError, new_error
from frame_semantics.graph import Edge, FrameType, NamedGraph
from frame_semantics.utilities import duplicates

__all__ = ['check_unique_names', 'check_frame_types', 'find_cycle_vertex',
           'reachable_sinks', 'walk_to_sink', 'name_not_found']

def check_unique_names(graph: NamedGraph) -> list[FrameSemanticsError]:
    """Reports every vertex name carried by more than one vertex

    :param graph: Graph to check
    :type graph: NamedGraph

    :return: Duplicate name errors
    :rtype: list[FrameSemanticsError]
    """
    return [new_error(ErrorCode.DUPLICATE_NAME,
                f"{graph.kind} has {graph.count(name)} vertices with name [{name}], "
                "names must be unique.")
            for name in duplicates(v.name for v in graph.graph.vertices())]

def check_frame_types(graph: NamedGraph, code: ErrorCode) -> list[FrameSemanticsError]:
    """Reports vertices whose payload is not a FrameType"""
    return [new_error(code, f"{graph.kind} vertex [{v.name}] has invalid frame type [{v.payload}].")
            for v in graph.graph.vertices() if not isinstance(v.payload, FrameType)]

def find_cycle_vertex(graph: NamedGraph) -> int | None:
    """Finds one vertex participating in a directed cycle

    :param graph: Graph to search
    :type graph: NamedGraph

    :return: Vertex id on a cycle, None if the graph is acyclic
    :rtype: int | None
    """
    try:
        cycle = nx.find_cycle(graph.graph, orientation='original')
    except nx.NetworkXNoCycle:
        return None
    return cycle[0][0]

def reachable_sinks(graph: NamedGraph, vid: int) -> list[int]:
    """Returns sink vertex ids reachable from a vertex, including itself"""
    g = graph.graph
    return [v for v in ({vid} | nx.descendants(g, vid)) if g.out_degree(v) == 0]

def name_not_found(graph: NamedGraph, name: str, code: ErrorCode) -> FrameSemanticsError:
    """Creates the error reported when a resolver is asked for an unknown name"""
    return new_error(code,
        f"{graph.kind} unable to find unique frame with name [{name}] in graph.",
        ErrorKind.NAME_NOT_FOUND)

def walk_to_sink(graph: NamedGraph, name: str,
                 invalid_code: ErrorCode, cycle_code: ErrorCode, error_code: ErrorCode) \
        -> tuple[int | None, list[Edge], list[FrameSemanticsError]]:
    """Follows the single outgoing edge of each vertex from a named vertex to a sink

    :param graph: Graph to traverse
    :type graph: NamedGraph

    :param name: Starting vertex name
    :type name: str

    :param invalid_code: Error code for an unknown name
    :type invalid_code: ErrorCode

    :param cycle_code: Error code for a revisited vertex
    :type cycle_code: ErrorCode

    :param error_code: Error code for a vertex with several outgoing edges
    :type error_code: ErrorCode

    :return: Sink vertex id, traversed edges ordered from the named vertex
        toward the sink, and errors. Sink id is None on error.
    :rtype: tuple[int | None, list[Edge], list[FrameSemanticsError]]
    """
    vid = graph.map.get(name)
    if vid is None:
        return None, [], [name_not_found(graph, name, invalid_code)]

    path: list[Edge] = []
    visited = {vid}
    while True:
        out = graph.graph.outgoing(vid)
        if not out:
            return vid, path, []

        if len(out) > 1:
            return None, path, [new_error(error_code,
                f"{graph.kind} vertex [{graph.name(vid)}] has {len(out)} outgoing edges, "
                "unable to resolve a unique path.")]

        edge = out[0]
        if edge.head in visited:
            return None, path, [new_error(cycle_code,
                f"{graph.kind} cycle detected, already visited vertex "
                f"[{graph.name(edge.head)}].")]

        visited.add(edge.head)
        path.append(edge)
        vid = edge.head
