"""geometry.py - Rigid Transform Utilities"""
from __future__ import annotations

import numpy.typing as npt

import operator as op

import numpy as np

import scipy.spatial.transform as sptl

from frame_semantics.config import DEFAULT_CONFIG

__all__ = ['Pose']

# %% Poses
class Pose():
    """Rigid 6-DOF pose of a follower frame expressed in a base frame

    :param position: Follower origin position in base frame, defaults to :code:`numpy.zeros(3)`
    :type position: numpy.typing.ArrayLike, optional

    :param angle: Euler angles of the follower in the base frame, defaults to :code:`numpy.zeros(3)`
    :type angle: numpy.typing.ArrayLike, optional

    :param sequence: Euler angle sequence, defaults to :code:`'xyz'` (extrinsic roll, pitch, yaw)
    :type sequence: str, optional

    :param degrees: Flag to denote if angles are supplied in degrees, defaults to :code:`False`
    :type degrees: bool, optional
    """
    def __init__(self,
            position: npt.ArrayLike | None = None,  # X, Y, Z
            angle   : npt.ArrayLike | None = None,  # Roll (X), Pitch (Y), Yaw (Z)
            sequence: str = 'xyz', degrees: bool = False):
        """Initialize Pose"""
        position = position if position is not None else np.zeros(3)
        angle    = angle    if angle    is not None else np.zeros(3)

        self.position = position
        self.rotation = sptl.Rotation.from_euler(sequence, angle, degrees)

    @classmethod
    def from_rpy(cls, x: float = 0, y: float = 0, z: float = 0,
                 roll: float = 0, pitch: float = 0, yaw: float = 0) -> Pose:
        """Creates pose from position and fixed axis roll, pitch, yaw angles in radians

        :return: Pose
        :rtype: Pose
        """
        return cls([x, y, z], [roll, pitch, yaw])

    @classmethod
    def from_rotation(cls, position: npt.ArrayLike, rotation: sptl.Rotation) -> Pose:
        """Creates pose from position and rotation operator

        :param position: Follower origin position in base frame
        :type position: numpy.typing.ArrayLike

        :param rotation: Follower orientation in base frame
        :type rotation: scipy.spatial.transform.Rotation

        :return: Pose
        :rtype: Pose
        """
        obj = cls(position)
        obj.rotation = rotation
        return obj

    @classmethod
    def identity(cls) -> Pose:
        """Returns identity pose"""
        return cls()

    position: np.ndarray = property(op.attrgetter('_position'))

    @position.setter
    def position(self, value: npt.ArrayLike):
        """Sets position to array conversion with double datatype

        :param value: Relative position between frames
        :type value: numpy.typing.ArrayLike
        """
        self._position = np.array(value, dtype=np.double)
        if self._position.shape != (3,):
            raise ValueError('Pose position must have three components')

    @property
    def rpy(self) -> np.ndarray:
        """Returns fixed axis roll, pitch, yaw angles in radians"""
        return self.rotation.as_euler('xyz')

    # Algebra
    def __mul__(self, other: Pose) -> Pose:
        """Composes poses such that `other`, expressed in this pose's follower
        frame, is expressed in this pose's base frame

        :param other: Pose expressed in this pose's follower frame
        :type other: Pose

        :return: Composite pose
        :rtype: Pose
        """
        if not isinstance(other, Pose):
            return NotImplemented

        return Pose.from_rotation(self.rotation.apply(other.position) + self.position,
                                  self.rotation * other.rotation)

    def inverse(self) -> Pose:
        """Returns pose of the base frame expressed in the follower frame

        :return: Inverse pose
        :rtype: Pose
        """
        inv = self.rotation.inv()
        return Pose.from_rotation(-inv.apply(self.position), inv)

    def as_matrix(self) -> np.ndarray:
        """Returns homogeneous transformation matrix

        :return: Matrix of shape :math:`(4,4)`
        :rtype: numpy.ndarray
        """
        T = np.eye(4)
        T[:3,:3] = self.rotation.as_matrix()
        T[:3, 3] = self.position
        return T

    def isclose(self, other: Pose, atol: float | None = None) -> bool:
        """Compares poses within an absolute tolerance on position and rotation angle

        :param other: Comparison pose
        :type other: Pose

        :param atol: Absolute tolerance, defaults to configured pose tolerance
        :type atol: float | None, optional

        :return: Comparison result
        :rtype: bool
        """
        atol = DEFAULT_CONFIG.pose_tolerance if atol is None else atol

        if not np.allclose(self.position, other.position, rtol=0, atol=atol):
            return False

        return (self.rotation.inv() * other.rotation).magnitude() <= atol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pose):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None

    def __str__(self) -> str:
        return "Pose({}, {})".format(np.array2string(self.position),
                                     np.array2string(self.rotation.as_quat()))

    def __repr__(self) -> str:
        return str(self)

    # Mapping
    def transform(self, point: npt.ArrayLike, orientation: str = 'f') -> np.ndarray:
        """Streamline rigid point transformations

        :param point: Point position vector
        :type point: numpy.typing.ArrayLike

        :param orientation: Transformation orientation, defaults to 'f'
        :type orientation: str, optional

        :raises ValueError: If `orientation` is not recognized

        :return: Point position vector in new frame
        :rtype: numpy.ndarray
        """
        if orientation in ['f', 'forward']:
            return self.forward_transform(np.array(point))
        elif orientation in ['r', 'i', 'reverse', 'inverse']:
            return self.inverse_transform(np.array(point))
        else:
            raise ValueError('Transformation orientation argument not valid')

    def forward_transform(self, point: np.ndarray) -> np.ndarray:
        """Perform forward transform from follower to base frame

        :param point: Point position vector in follower frame
        :type point: numpy.ndarray

        :return: Point position vector in base frame
        :rtype: numpy.ndarray
        """
        return self.rotation.apply(point) + self.position

    def inverse_transform(self, point: np.ndarray) -> np.ndarray:
        """Perform inverse transform from base to follower frame

        :param point: Point position vector in base frame
        :type point: numpy.ndarray

        :return: Point position vector in follower frame
        :rtype: numpy.ndarray
        """
        return self.rotation.apply(point - self.position, inverse=True)

    def rotate(self, direction: npt.ArrayLike, orientation: str = 'f') -> np.ndarray:
        """Streamline rigid direction rotations

        :param direction: Direction vector
        :type direction: numpy.typing.ArrayLike

        :param orientation: Rotation orientation, defaults to 'f'
        :type orientation: str, optional

        :raises ValueError: If `orientation` is not recognized

        :return: Direction vector in new frame
        :rtype: numpy.ndarray
        """
        if orientation in ['f', 'forward']:
            return self.rotation.apply(np.array(direction))
        elif orientation in ['r', 'i', 'reverse', 'inverse']:
            return self.rotation.apply(np.array(direction), inverse=True)
        else:
            raise ValueError('Rotation orientation argument not valid')
