"""relative_pose.py - Pose Relative-To Graph

Encodes which frame each pose of a model is expressed in. Edges point from a
frame toward its relative_to frame and carry the raw authored pose, forming a
tree rooted at the implicit model frame.
"""
from __future__ import annotations

import logging

import networkx as nx

from frame_semantics.attachment import add_model_vertices
from frame_semantics.config import DEFAULT_CONFIG, FrameSemanticsConfig
from frame_semantics.errors import ErrorCode, FrameSemanticsError, new_error
from frame_semantics.geometry import Pose
from frame_semantics.graph import FrameType, PoseRelativeToGraph
from frame_semantics.model import Frame, Joint, Link, Model
from frame_semantics.validation import (
    check_frame_types, check_unique_names, find_cycle_vertex, walk_to_sink)

__all__ = ['default_relative_to', 'build_pose_relative_to_graph',
           'validate_pose_relative_to_graph', 'resolve_pose_relative_to_root',
           'resolve_pose']

logger = logging.getLogger(__name__)

# %% Construction
def default_relative_to(entity: Link | Joint | Frame, model_frame: str) -> str:
    """Returns the frame an entity pose is expressed in

    :param entity: Link, joint or frame
    :type entity: Link | Joint | Frame

    :param model_frame: Model frame name
    :type model_frame: str

    :return: Explicit relative_to if set, otherwise the child link for joints,
        the attached_to frame for frames and the model frame otherwise
    :rtype: str
    """
    if entity.relative_to:
        return entity.relative_to
    if isinstance(entity, Joint):
        return entity.child
    if isinstance(entity, Frame) and entity.attached_to:
        return entity.attached_to
    return model_frame

def build_pose_relative_to_graph(model: Model, config: FrameSemanticsConfig = DEFAULT_CONFIG) \
        -> tuple[PoseRelativeToGraph, list[FrameSemanticsError]]:
    """Builds the relative-to graph of a model

    :param model: Loaded model
    :type model: Model

    :param config: Configuration, defaults to DEFAULT_CONFIG
    :type config: FrameSemanticsConfig, optional

    :return: Best-effort graph and accumulated errors
    :rtype: tuple[PoseRelativeToGraph, list[FrameSemanticsError]]
    """
    graph = PoseRelativeToGraph(config.model_frame)
    added, errors = add_model_vertices(graph, model)

    for entity, vid in added:
        kind = type(entity).__name__.lower()
        target = default_relative_to(entity, graph.model_frame)

        if target == entity.name:
            errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_CYCLE,
                f"relative_to name [{target}] is identical to {kind} name "
                f"[{entity.name}], causing a graph cycle in model [{model.name}]."))
            continue

        if target not in graph:
            errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_INVALID,
                f"relative_to name [{target}] specified by {kind} with name "
                f"[{entity.name}] does not match a link, joint, or frame name "
                f"in model [{model.name}]."))
            continue

        graph.graph.add_directed_edge(vid, graph.map[target], entity.pose)

    logger.debug("Built %r for model [%s] with %d errors", graph, model.name, len(errors))
    return graph, errors

# %% Validation
def validate_pose_relative_to_graph(graph: PoseRelativeToGraph) -> list[FrameSemanticsError]:
    """Checks that poses form a tree rooted at the model frame

    :param graph: Relative-to graph
    :type graph: PoseRelativeToGraph

    :return: Errors
    :rtype: list[FrameSemanticsError]
    """
    errors = check_unique_names(graph)
    errors += check_frame_types(graph, ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR)
    g = graph.graph

    root = graph.find(graph.model_frame)
    if root is None or root.payload is not FrameType.MODEL:
        errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
            f"{graph.kind} is missing the implicit model frame [{graph.model_frame}]."))
        return errors

    for v in g.vertices():
        out = g.outgoing(v.id)
        if v.id == root.id:
            if out:
                errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
                    f"{graph.kind} model frame vertex [{v.name}] should have no outgoing edges."))
        elif len(out) != 1:
            errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
                f"{graph.kind} vertex [{v.name}] has {len(out)} outgoing edges, "
                "should have exactly one."))
        elif not isinstance(out[0].payload, Pose):
            errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
                f"{graph.kind} edge from vertex [{v.name}] does not carry a pose."))

    cycle = find_cycle_vertex(graph)
    if cycle is not None:
        errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_CYCLE,
            f"{graph.kind} cycle detected, already visited vertex [{graph.name(cycle)}]."))
        return errors

    for sink in g.sinks():
        if sink == root.id:
            continue
        stranded = [graph.name(t) for t in sorted({sink} | nx.ancestors(g, sink))]
        errors.append(new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
            f"{graph.kind} vertices {stranded} do not resolve to the model frame "
            f"[{graph.model_frame}]."))

    return errors

# %% Resolution
def resolve_pose_relative_to_root(graph: PoseRelativeToGraph, frame_name: str) \
        -> tuple[Pose | None, list[FrameSemanticsError]]:
    """Resolves a frame pose expressed in the model frame by composing raw
    poses along the path from the model frame to the frame

    :param graph: Relative-to graph
    :type graph: PoseRelativeToGraph

    :param frame_name: Frame, link, joint or model frame name
    :type frame_name: str

    :return: Pose in the model frame, None on error, and errors
    :rtype: tuple[Pose | None, list[FrameSemanticsError]]
    """
    sink, path, errors = walk_to_sink(graph, frame_name,
                                      ErrorCode.POSE_RELATIVE_TO_INVALID,
                                      ErrorCode.POSE_RELATIVE_TO_CYCLE,
                                      ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR)
    if errors:
        return None, errors

    if sink != graph.map.get(graph.model_frame):
        return None, [new_error(ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR,
            f"{graph.kind} frame [{frame_name}] resolves to [{graph.name(sink)}] "
            f"instead of the model frame [{graph.model_frame}].")]

    pose = Pose.identity()
    for edge in reversed(path):
        pose = pose * edge.payload

    return pose, []

def resolve_pose(graph: PoseRelativeToGraph, frame_name: str, relative_to: str) \
        -> tuple[Pose | None, list[FrameSemanticsError]]:
    """Resolves the pose of one frame expressed in another frame

    :param graph: Relative-to graph
    :type graph: PoseRelativeToGraph

    :param frame_name: Name of the frame whose pose is resolved
    :type frame_name: str

    :param relative_to: Name of the frame the result is expressed in
    :type relative_to: str

    :return: Relative pose, None on error, and errors of the first failing resolution
    :rtype: tuple[Pose | None, list[FrameSemanticsError]]
    """
    frame_pose, errors = resolve_pose_relative_to_root(graph, frame_name)
    if errors:
        return None, errors

    relative_to_pose, errors = resolve_pose_relative_to_root(graph, relative_to)
    if errors:
        return None, errors

    return relative_to_pose.inverse() * frame_pose, []
