"""Geometry module tests"""
import pytest

import numpy as np
import scipy.spatial.transform as sptl

from frame_semantics.geometry import Pose

from testing_utilities import random_uniform, random_pose

__all__ = ['TestPose', 'TestPoseConventions']

NUM_POSES = 10

@pytest.mark.parametrize('position, angle',
    [(random_uniform(10,3), random_uniform(np.pi,3)) for _ in range(NUM_POSES)])
class TestPose():
    def test_initialization(self, position: np.ndarray, angle: np.ndarray):
        """Tests homogeneous matrix against scipy reference via Frobenius norm

        :param position: Pose position
        :type position: np.ndarray

        :param angle: Roll, pitch, yaw angles
        :type angle: np.ndarray
        """
        ref_mat = np.eye(4)
        ref_mat[:3,:3] = sptl.Rotation.from_euler('xyz', angle).as_matrix()
        ref_mat[:3, 3] = position

        mat = Pose(position, angle).as_matrix()

        frob_error = np.linalg.norm(mat - ref_mat, 'fro') / np.linalg.norm(ref_mat, 'fro')
        assert frob_error <= 1e-14, f"Test Failed: {frob_error} > 1e-14"

    def test_composition(self, position: np.ndarray, angle: np.ndarray):
        """Tests composition against homogeneous matrix product"""
        a, b = Pose(position, angle), random_pose()

        frob_error = np.linalg.norm((a * b).as_matrix() - a.as_matrix() @ b.as_matrix(), 'fro')
        assert frob_error <= 1e-12, f"Test Failed: {frob_error} > 1e-12"

    def test_inverse(self, position: np.ndarray, angle: np.ndarray):
        """Tests that composing with the inverse yields identity on both sides"""
        pose = Pose(position, angle)

        assert pose * pose.inverse() == Pose.identity()
        assert pose.inverse() * pose == Pose.identity()

    def test_transform_round_trip(self, position: np.ndarray, angle: np.ndarray):
        """Tests forward then inverse point transform recovers the point"""
        pose, point = Pose(position, angle), random_uniform(5,3)

        assert np.allclose(pose.transform(pose.transform(point, 'f'), 'r'), point)
        assert np.allclose(pose.transform(point), pose.as_matrix()[:3] @ np.append(point, 1))

    def test_rotate(self, position: np.ndarray, angle: np.ndarray):
        """Tests direction rotation ignores translation"""
        pose, direction = Pose(position, angle), random_uniform(1,3)

        assert np.allclose(pose.rotate(direction), pose.as_matrix()[:3,:3] @ direction)
        assert np.allclose(pose.rotate(pose.rotate(direction), 'inverse'), direction)

class TestPoseConventions():
    def test_default_is_identity(self):
        pose = Pose()

        assert np.array_equal(pose.position, np.zeros(3))
        assert np.allclose(pose.as_matrix(), np.eye(4))
        assert pose == Pose.identity()

    def test_rpy_is_fixed_axis(self):
        """Roll, pitch and yaw rotate about the fixed X, Y and Z axes in that order"""
        pose = Pose.from_rpy(0, 0, 0, np.pi/2, 0, np.pi/2)

        # Roll maps Y onto Z, yaw then maps X onto Y
        assert np.allclose(pose.rotate([0, 1, 0]), [0, 0, 1])
        assert np.allclose(pose.rotate([1, 0, 0]), [0, 1, 0])
        assert np.allclose(pose.rpy, [np.pi/2, 0, np.pi/2])

    def test_pitch_translation(self):
        """Child offset along Z of a pitched parent lands along X"""
        parent = Pose.from_rpy(0, 0, 0, 0, np.pi/2, 0)
        child = Pose.from_rpy(0, 0, 4)

        assert parent * child == Pose.from_rpy(4, 0, 0, 0, np.pi/2, 0)

    def test_degrees(self):
        assert Pose(angle=[0, 0, 90], degrees=True) == Pose.from_rpy(yaw=np.pi/2)

    def test_tolerance(self):
        pose = Pose.from_rpy(1, 2, 3)

        assert pose != Pose.from_rpy(1, 2, 3 + 1e-6)
        assert pose.isclose(Pose.from_rpy(1, 2, 3 + 1e-6), atol=1e-5)
        assert pose != 'pose'

    def test_invalid_orientation(self):
        with pytest.raises(ValueError):
            Pose().transform([0, 0, 0], 'sideways')

        with pytest.raises(ValueError):
            Pose().rotate([0, 0, 1], 'sideways')

    def test_invalid_position(self):
        with pytest.raises(ValueError):
            Pose([0, 0])
