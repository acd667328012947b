"""attachment.py - Frame Attached-To Graph

Encodes which rigid body every named frame of a model rides on. Vertices are
the implicit model frame, links, joints and explicit frames; edges point from
a frame toward the thing it is attached to, so that following edges from any
vertex ends at the link it is rigidly attached to.
"""
from __future__ import annotations

import logging

from frame_semantics.config import DEFAULT_CONFIG, FrameSemanticsConfig
from frame_semantics.errors import ErrorCode, FrameSemanticsError, new_error
from frame_semantics.graph import FrameAttachedToGraph, FrameType, NamedGraph
from frame_semantics.model import Frame, Joint, Link, Model
from frame_semantics.validation import (
    check_frame_types, check_unique_names, find_cycle_vertex, reachable_sinks, walk_to_sink)

__all__ = ['build_frame_attached_to_graph', 'validate_frame_attached_to_graph',
           'resolve_frame_attached_to_body', 'add_model_vertices']

logger = logging.getLogger(__name__)

# %% Construction
def add_model_vertices(graph: NamedGraph, model: Model) \
        -> tuple[list[tuple[Link | Joint | Frame, int]], list[FrameSemanticsError]]:
    """Adds the implicit model frame followed by one vertex per link, joint and
    explicit frame. Unnamed and duplicate entities are reported and skipped.

    :param graph: Empty graph to populate
    :type graph: FrameAttachedToGraph | PoseRelativeToGraph

    :param model: Loaded model
    :type model: Model

    :return: Entities that received a vertex paired with their vertex id, and errors
    :rtype: tuple[list[tuple[Link | Joint | Frame, int]], list[FrameSemanticsError]]
    """
    added, errors = [], []
    graph.add_vertex(graph.model_frame, FrameType.MODEL)

    entities = [(l, FrameType.LINK)  for l in model.links] \
             + [(j, FrameType.JOINT) for j in model.joints] \
             + [(f, FrameType.FRAME) for f in model.frames]

    for entity, frame_type in entities:
        if not entity.name:
            errors.append(new_error(ErrorCode.ATTRIBUTE_MISSING,
                f"{graph.kind} found a {frame_type.value} without a name in model [{model.name}]."))
        elif entity.name == graph.model_frame:
            errors.append(new_error(ErrorCode.DUPLICATE_NAME,
                f"{frame_type.value.capitalize()} name [{entity.name}] is reserved "
                f"in model [{model.name}]."))
        elif entity.name in graph:
            errors.append(new_error(ErrorCode.DUPLICATE_NAME,
                f"{frame_type.value.capitalize()} with name [{entity.name}] in model "
                f"[{model.name}] collides with another {graph.find(entity.name).payload.value}, "
                "frame names must be unique."))
        else:
            added.append((entity, graph.add_vertex(entity.name, frame_type)))

    return added, errors

def build_frame_attached_to_graph(model: Model, config: FrameSemanticsConfig = DEFAULT_CONFIG) \
        -> tuple[FrameAttachedToGraph, list[FrameSemanticsError]]:
    """Builds the attached-to graph of a model

    :param model: Loaded model
    :type model: Model

    :param config: Configuration, defaults to DEFAULT_CONFIG
    :type config: FrameSemanticsConfig, optional

    :return: Best-effort graph and accumulated errors
    :rtype: tuple[FrameAttachedToGraph, list[FrameSemanticsError]]
    """
    graph = FrameAttachedToGraph(config.model_frame)
    added, errors = add_model_vertices(graph, model)
    g = graph.graph

    # Model frame rides on the canonical link
    canonical = graph.find(model.canonical_link_name)
    if not model.links:
        errors.append(new_error(ErrorCode.MODEL_WITHOUT_LINK,
            f"A model must have at least one link, model [{model.name}] has none."))
    elif canonical is None or canonical.payload is not FrameType.LINK:
        errors.append(new_error(ErrorCode.MODEL_CANONICAL_LINK_INVALID,
            f"canonical_link with name [{model.canonical_link_name}] not found "
            f"in model [{model.name}]."))
    else:
        g.add_directed_edge(graph.map[graph.model_frame], canonical.id)

    for joint, vid in added:
        if not isinstance(joint, Joint):
            continue

        child = graph.find(joint.child)
        if child is None or child.payload is not FrameType.LINK:
            errors.append(new_error(ErrorCode.JOINT_CHILD_LINK_INVALID,
                f"Child link with name [{joint.child}] specified by joint with name "
                f"[{joint.name}] not found in model [{model.name}]."))
            continue

        g.add_directed_edge(vid, child.id)

    for frame, vid in added:
        if not isinstance(frame, Frame):
            continue

        target = frame.attached_to or graph.model_frame
        if target == frame.name:
            errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_CYCLE,
                f"attached_to name [{target}] is identical to frame name "
                f"[{frame.name}], causing a graph cycle in model [{model.name}]."))
            continue

        if target not in graph:
            errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_INVALID,
                f"attached_to name [{target}] specified by frame with name "
                f"[{frame.name}] does not match a link, joint, or frame name "
                f"in model [{model.name}]."))
            continue

        g.add_directed_edge(vid, graph.map[target])

    logger.debug("Built %r for model [%s] with %d errors", graph, model.name, len(errors))
    return graph, errors

# %% Validation
def validate_frame_attached_to_graph(graph: FrameAttachedToGraph) -> list[FrameSemanticsError]:
    """Checks that every vertex is attached to exactly one link

    :param graph: Attached-to graph
    :type graph: FrameAttachedToGraph

    :return: Errors
    :rtype: list[FrameSemanticsError]
    """
    errors = check_unique_names(graph)
    errors += check_frame_types(graph, ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR)
    g = graph.graph

    model_vertex = graph.find(graph.model_frame)
    if model_vertex is None or model_vertex.payload is not FrameType.MODEL:
        errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
            f"{graph.kind} is missing the implicit model frame [{graph.model_frame}]."))

    for v in g.vertices():
        out = g.outgoing(v.id)
        if v.payload is FrameType.LINK:
            if out:
                errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
                    f"{graph.kind} link vertex [{v.name}] should have no outgoing edges."))
        elif v.payload in (FrameType.MODEL, FrameType.JOINT, FrameType.FRAME):
            if len(out) != 1:
                errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
                    f"{graph.kind} {v.payload.value} vertex [{v.name}] has {len(out)} "
                    "outgoing edges, should have exactly one."))
            elif v.payload is not FrameType.FRAME \
                    and g.vertex(out[0].head).payload is not FrameType.LINK:
                errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
                    f"{graph.kind} {v.payload.value} vertex [{v.name}] is attached to "
                    f"[{g.vertex(out[0].head).name}], which is not a link."))

    cycle = find_cycle_vertex(graph)
    if cycle is not None:
        errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_CYCLE,
            f"{graph.kind} cycle detected, already visited vertex [{graph.name(cycle)}]."))
        return errors

    for v in g.vertices():
        sinks = reachable_sinks(graph, v.id)
        links = [s for s in sinks if g.vertex(s).payload is FrameType.LINK]
        if len(sinks) != 1 or len(links) != 1:
            errors.append(new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
                f"{graph.kind} vertex [{v.name}] is attached to "
                f"{[graph.name(s) for s in sinks]}, expected exactly one link."))

    return errors

# %% Resolution
def resolve_frame_attached_to_body(graph: FrameAttachedToGraph, frame_name: str) \
        -> tuple[str | None, list[FrameSemanticsError]]:
    """Resolves the name of the link a frame is ultimately attached to

    :param graph: Attached-to graph
    :type graph: FrameAttachedToGraph

    :param frame_name: Frame, link, joint or model frame name
    :type frame_name: str

    :return: Link name, None on error, and errors
    :rtype: tuple[str | None, list[FrameSemanticsError]]
    """
    sink, _, errors = walk_to_sink(graph, frame_name,
                                   ErrorCode.FRAME_ATTACHED_TO_INVALID,
                                   ErrorCode.FRAME_ATTACHED_TO_CYCLE,
                                   ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR)
    if errors:
        return None, errors

    vertex = graph.graph.vertex(sink)
    if vertex.payload is not FrameType.LINK:
        return None, [new_error(ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR,
            f"{graph.kind} frame [{frame_name}] resolves to [{vertex.name}], which is not a link.")]

    return vertex.name, []
