"""plotting.py - Frame Visualization"""
from __future__ import annotations

import logging

import numpy as np

import matplotlib.pyplot as plt

from frame_semantics.graph import FrameType, PoseRelativeToGraph
from frame_semantics.relative_pose import resolve_pose_relative_to_root

__all__ = ['FRAME_COLORS', 'plot_frames']

logger = logging.getLogger(__name__)

FRAME_COLORS = {FrameType.MODEL: 'k', FrameType.LINK: 'b',
                FrameType.JOINT: 'r', FrameType.FRAME: 'g'}

def plot_frames(graph: PoseRelativeToGraph, ax: plt.Axes | None = None,
                size: float = 1, labels: bool = True) -> plt.Axes:
    """3D plot of every frame of a relative-to graph in the model frame

    :param graph: Relative-to graph
    :type graph: PoseRelativeToGraph

    :param ax: 3D plotting axes, defaults to new axes on the current figure
    :type ax: matplotlib.pyplot.Axes | None, optional

    :param size: Quiver size, defaults to 1
    :type size: float, optional

    :param labels: Annotate frame origins with names, defaults to True
    :type labels: bool, optional

    :return: Plotting axes
    :rtype: matplotlib.pyplot.Axes
    """
    ax = plt.gcf().add_subplot(projection='3d') if ax is None else ax

    for vertex in graph.graph.vertices():
        pose, errors = resolve_pose_relative_to_root(graph, vertex.name)
        if errors:
            logger.warning("Skipping frame [%s]: %s", vertex.name, errors[0].message)
            continue

        O = pose.position
        color = FRAME_COLORS.get(vertex.payload, 'k')
        for i in range(3):
            ax.quiver(*O, *pose.rotate(np.eye(3)[i]),
                color=color, length=size, normalize=True)

        if labels:
            ax.text(*O, vertex.name, color=color)

    ax.set_xlabel('X [m]')
    ax.set_ylabel('Y [m]')
    ax.set_zlabel('Z [m]')
    ax.set_aspect('equal')

    return ax
