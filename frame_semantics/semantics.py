"""semantics.py - Frame Semantics Entry Points"""
from __future__ import annotations

from frame_semantics.attachment import (
    build_frame_attached_to_graph, validate_frame_attached_to_graph, resolve_frame_attached_to_body)
from frame_semantics.config import DEFAULT_CONFIG, FrameSemanticsConfig
from frame_semantics.errors import FrameSemanticsError
from frame_semantics.kinematics import build_kinematic_graph, validate_kinematic_graph
from frame_semantics.model import Model
from frame_semantics.relative_pose import (
    build_pose_relative_to_graph, validate_pose_relative_to_graph,
    resolve_pose_relative_to_root, resolve_pose)

__all__ = ['check_frame_graphs',
           'build_kinematic_graph', 'validate_kinematic_graph',
           'build_frame_attached_to_graph', 'validate_frame_attached_to_graph',
           'resolve_frame_attached_to_body',
           'build_pose_relative_to_graph', 'validate_pose_relative_to_graph',
           'resolve_pose_relative_to_root', 'resolve_pose']

def check_frame_graphs(model: Model,
                       config: FrameSemanticsConfig = DEFAULT_CONFIG) -> list[FrameSemanticsError]:
    """Builds and validates the kinematic, attached-to and relative-to graphs
    of a model. Validation runs on the best-effort graph even when its build
    reported errors.

    :param model: Loaded model
    :type model: Model

    :param config: Configuration, defaults to DEFAULT_CONFIG
    :type config: FrameSemanticsConfig, optional

    :return: Errors of every build and validation pass
    :rtype: list[FrameSemanticsError]
    """
    errors = []

    kinematic_graph, build_errors = build_kinematic_graph(model)
    errors += build_errors + validate_kinematic_graph(kinematic_graph)

    attached_graph, build_errors = build_frame_attached_to_graph(model, config)
    errors += build_errors + validate_frame_attached_to_graph(attached_graph)

    pose_graph, build_errors = build_pose_relative_to_graph(model, config)
    errors += build_errors + validate_pose_relative_to_graph(pose_graph)

    return errors
