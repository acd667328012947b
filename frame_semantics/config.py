"""config.py - Frame Semantics Configuration"""
from dataclasses import dataclass

__all__ = ['FrameSemanticsConfig', 'DEFAULT_CONFIG']

@dataclass(frozen=True)
class FrameSemanticsConfig:
    """Frame semantics configuration

    :param model_frame: Reserved name of the implicit model frame, defaults to '__model__'
    :type model_frame: str, optional

    :param pose_tolerance: Absolute tolerance for pose equality, defaults to 1e-9
    :type pose_tolerance: float, optional

    :param sdf_version: Description format version read by the model reader, defaults to '1.7'
    :type sdf_version: str, optional
    """
    model_frame: str = '__model__'
    pose_tolerance: float = 1e-9
    sdf_version: str = '1.7'

DEFAULT_CONFIG = FrameSemanticsConfig()
