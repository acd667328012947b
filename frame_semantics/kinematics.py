"""kinematics.py - Kinematic Connectivity Graph"""
from __future__ import annotations

import logging

import networkx as nx

from frame_semantics.errors import ErrorCode, FrameSemanticsError, new_error
from frame_semantics.graph import KinematicGraph
from frame_semantics.model import Model
from frame_semantics.validation import check_unique_names, find_cycle_vertex

__all__ = ['build_kinematic_graph', 'validate_kinematic_graph',
           'root_link', 'kinematic_path']

logger = logging.getLogger(__name__)

# %% Construction
def build_kinematic_graph(model: Model) -> tuple[KinematicGraph, list[FrameSemanticsError]]:
    """Builds graph with links as vertices and joints as edges pointing from
    child link to parent link

    :param model: Loaded model
    :type model: Model

    :return: Best-effort graph and accumulated errors
    :rtype: tuple[KinematicGraph, list[FrameSemanticsError]]
    """
    graph = KinematicGraph()
    errors = []

    for link in model.links:
        if link.name in graph:
            errors.append(new_error(ErrorCode.DUPLICATE_NAME,
                f"Link with name [{link.name}] already exists in model [{model.name}]."))
            continue
        graph.add_vertex(link.name, link)

    for joint in model.joints:
        parent = graph.map.get(joint.parent)
        child  = graph.map.get(joint.child)

        if parent is None:
            errors.append(new_error(ErrorCode.JOINT_PARENT_LINK_INVALID,
                f"Joint [{joint.name}] parent link name [{joint.parent}] not found "
                f"in model [{model.name}]."))
        if child is None:
            errors.append(new_error(ErrorCode.JOINT_CHILD_LINK_INVALID,
                f"Joint [{joint.name}] child link name [{joint.child}] not found "
                f"in model [{model.name}]."))
        if parent is None or child is None:
            continue

        graph.graph.add_directed_edge(child, parent, joint)

    logger.debug("Built %r for model [%s] with %d errors", graph, model.name, len(errors))
    return graph, errors

# %% Validation
def validate_kinematic_graph(graph: KinematicGraph) -> list[FrameSemanticsError]:
    """Checks that links form a single tree rooted at one link

    :param graph: Kinematic graph
    :type graph: KinematicGraph

    :return: Errors
    :rtype: list[FrameSemanticsError]
    """
    errors = check_unique_names(graph)
    g = graph.graph

    if g.number_of_nodes() == 0:
        return errors

    cycle = find_cycle_vertex(graph)
    if cycle is not None:
        errors.append(new_error(ErrorCode.KINEMATIC_GRAPH_CYCLE,
            f"{graph.kind} cycle detected, already visited vertex [{graph.name(cycle)}]."))
        return errors

    for vid in g.nodes:
        if g.out_degree(vid) > 1:
            errors.append(new_error(ErrorCode.KINEMATIC_GRAPH_ERROR,
                f"{graph.kind} link [{graph.name(vid)}] is the child of "
                f"{g.out_degree(vid)} joints."))

    if not nx.is_weakly_connected(g):
        components = sorted(sorted(graph.name(v) for v in c)
                            for c in nx.weakly_connected_components(g))
        errors.append(new_error(ErrorCode.KINEMATIC_GRAPH_ERROR,
            f"{graph.kind} has {len(components)} disconnected components: {components}."))

    sinks = g.sinks()
    if len(sinks) != 1:
        errors.append(new_error(ErrorCode.KINEMATIC_GRAPH_ERROR,
            f"{graph.kind} has {len(sinks)} root links "
            f"{[graph.name(v) for v in sinks]}, expected exactly one."))

    return errors

# %% Traversal
def root_link(graph: KinematicGraph) -> str | None:
    """Returns root link name of a valid kinematic graph

    :param graph: Kinematic graph
    :type graph: KinematicGraph

    :return: Name of the unique link without a parent joint, None if not unique
    :rtype: str | None
    """
    sinks = graph.graph.sinks()
    return graph.name(sinks[0]) if len(sinks) == 1 else None

def kinematic_path(graph: KinematicGraph, source: str, target: str) -> list[tuple[str,str,str]]:
    """Generates joint sequence between two links

    :param graph: Kinematic graph
    :type graph: KinematicGraph

    :param source: Source link name
    :type source: str

    :param target: Target link name
    :type target: str

    :raises KeyError: If either link name is not present
    :raises networkx.NetworkXNoPath: If the links are not connected

    :return: Shortest path between links as a list of tuples describing the
        traversed joints: (child link, joint name, orientation), where
        orientation is 'forward' when stepping from child to parent
    :rtype: list[tuple[str,str,str]]
    """
    nodes = nx.shortest_path(graph.graph.to_undirected(as_view=True),
                             graph.map[source], graph.map[target])

    path = []
    for a, b in zip(nodes[:-1], nodes[1:]):
        if graph.graph.has_edge(a, b):
            joint = next(iter(graph.graph.get_edge_data(a, b).values()))['payload']
            path.append((graph.name(a), joint.name, 'forward'))
        else:
            joint = next(iter(graph.graph.get_edge_data(b, a).values()))['payload']
            path.append((graph.name(b), joint.name, 'reverse'))

    return path
