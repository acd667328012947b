"""Pose relative-to graph tests"""
import pytest

import numpy as np

from frame_semantics.errors import ErrorCode, ErrorKind
from frame_semantics.geometry import Pose
from frame_semantics.graph import FrameType, PoseRelativeToGraph
from frame_semantics.model import Frame, Joint, JointType, Link, Model
from frame_semantics.relative_pose import (
    default_relative_to, build_pose_relative_to_graph, validate_pose_relative_to_graph,
    resolve_pose_relative_to_root, resolve_pose)

from testing_utilities import MODEL_FRAME_RELATIVE_TO_JOINT, load_fixture, \
    pose_chain_model, random_pose, two_link_model

__all__ = ['TestPoseRelativeToGraph', 'TestResolvePose']

NUM_CHAINS = 5
PI_2 = np.pi/2

@pytest.fixture
def joint_graph() -> PoseRelativeToGraph:
    graph, errors = build_pose_relative_to_graph(load_fixture(MODEL_FRAME_RELATIVE_TO_JOINT))
    assert errors == []
    return graph

class TestPoseRelativeToGraph():
    def test_fixture(self, joint_graph: PoseRelativeToGraph):
        assert validate_pose_relative_to_graph(joint_graph) == []

        assert len(joint_graph.map) == 8
        assert len(joint_graph.graph.vertices()) == 8
        assert len(joint_graph.graph.directed_edges()) == 7
        assert set(joint_graph.map) == {'__model__', 'P', 'C', 'J', 'F1', 'F2', 'F3', 'F4'}

    def test_model_frame_is_first_sink(self, joint_graph: PoseRelativeToGraph):
        assert joint_graph.map['__model__'] == 0
        assert joint_graph.graph.sinks() == [0]

    def test_edges_carry_raw_pose(self, joint_graph: PoseRelativeToGraph):
        edge, = joint_graph.graph.outgoing(joint_graph.map['F4'])

        assert joint_graph.name(edge.head) == 'F3'
        assert edge.payload == Pose.from_rpy(0, 0, 4, 0, -PI_2, 0)

    def test_default_relative_to(self):
        assert default_relative_to(Link('L'), '__model__') == '__model__'
        assert default_relative_to(Joint('J', child='C'), '__model__') == 'C'
        assert default_relative_to(Frame('F'), '__model__') == '__model__'
        assert default_relative_to(Frame('F', attached_to='L'), '__model__') == 'L'
        assert default_relative_to(Frame('F', attached_to='L', relative_to='M'), '__model__') == 'M'
        assert default_relative_to(Joint('J', child='C', relative_to='P'), '__model__') == 'P'

    def test_joint_defaults_to_child(self):
        graph, errors = build_pose_relative_to_graph(two_link_model())
        assert errors == []

        edge, = graph.graph.outgoing(graph.map['J'])
        assert graph.name(edge.head) == 'B'

    def test_invalid_relative_to(self):
        model = two_link_model()
        model.frames = [Frame('F', relative_to='nowhere')]
        graph, errors = build_pose_relative_to_graph(model)

        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_INVALID]
        assert errors[0].kind is ErrorKind.REFERENCE_MISSING
        assert 'nowhere' in errors[0].message
        assert graph.graph.outgoing(graph.map['F']) == []
        assert {e.code for e in validate_pose_relative_to_graph(graph)} == \
            {ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR}

    def test_joint_with_unknown_child(self):
        model = two_link_model()
        model.joints[0].child = 'missing'
        _, errors = build_pose_relative_to_graph(model)

        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_INVALID]

    def test_self_relative(self):
        model = two_link_model()
        model.links[0].relative_to = 'A'
        _, errors = build_pose_relative_to_graph(model)

        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]

    def test_cycle(self):
        model = two_link_model()
        model.frames = [Frame('F1', relative_to='F2'), Frame('F2', relative_to='F1')]
        graph, errors = build_pose_relative_to_graph(model)
        assert errors == []

        errors = validate_pose_relative_to_graph(graph)
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]
        assert errors[0].kind is ErrorKind.GRAPH_CYCLE

    def test_duplicate_names(self):
        model = two_link_model()
        model.frames = [Frame('J'), Frame('')]
        graph, errors = build_pose_relative_to_graph(model)

        assert [e.code for e in errors] == [ErrorCode.DUPLICATE_NAME, ErrorCode.ATTRIBUTE_MISSING]
        assert graph.find('J').payload is FrameType.JOINT
        assert validate_pose_relative_to_graph(graph) == []

    def test_validator_detects_root_edge(self, joint_graph: PoseRelativeToGraph):
        joint_graph.graph.add_directed_edge(0, joint_graph.map['P'], Pose())

        errors = validate_pose_relative_to_graph(joint_graph)
        assert ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR in [e.code for e in errors]
        assert ErrorCode.POSE_RELATIVE_TO_CYCLE in [e.code for e in errors]

    def test_validator_detects_branching(self, joint_graph: PoseRelativeToGraph):
        joint_graph.graph.add_directed_edge(joint_graph.map['F4'], 0, Pose())

        errors = validate_pose_relative_to_graph(joint_graph)
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR]
        assert '[F4]' in errors[0].message

    def test_validator_detects_missing_pose(self):
        graph = PoseRelativeToGraph()
        root = graph.add_vertex('__model__', FrameType.MODEL)
        graph.graph.add_directed_edge(graph.add_vertex('L', FrameType.LINK), root, 'not a pose')

        errors = validate_pose_relative_to_graph(graph)
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR]

    def test_validator_detects_missing_model_frame(self):
        graph = PoseRelativeToGraph()
        graph.add_vertex('L', FrameType.LINK)

        errors = validate_pose_relative_to_graph(graph)
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR]

class TestResolvePose():
    @pytest.mark.parametrize('name, expected', [
        ('__model__', Pose.from_rpy()),
        ('P',  Pose.from_rpy(1, 0, 0)),
        ('F1', Pose.from_rpy(1, 0, 1)),
        ('C',  Pose.from_rpy(2, 0, 0, 0, PI_2, 0)),
        ('F2', Pose.from_rpy(4, 0, 0, 0, PI_2, 0)),
        ('J',  Pose.from_rpy(2, 3, 0)),
        ('F3', Pose.from_rpy(2, 3, 3, 0, PI_2, 0)),
        ('F4', Pose.from_rpy(6, 3, 3))])
    def test_relative_to_root(self, joint_graph: PoseRelativeToGraph, name: str, expected: Pose):
        pose, errors = resolve_pose_relative_to_root(joint_graph, name)

        assert errors == []
        assert pose == expected

    @pytest.mark.parametrize('name, relative_to, expected', [
        ('P',  '__model__', Pose.from_rpy(1, 0, 0)),
        ('C',  '__model__', Pose.from_rpy(2, 0, 0, 0, PI_2, 0)),
        ('J',  'C',  Pose.from_rpy(0, 3, 0, 0, -PI_2, 0)),
        ('F1', 'P',  Pose.from_rpy(0, 0, 1)),
        ('F2', 'C',  Pose.from_rpy(0, 0, 2)),
        ('F3', 'J',  Pose.from_rpy(0, 0, 3, 0, PI_2, 0)),
        ('F4', 'F3', Pose.from_rpy(0, 0, 4, 0, -PI_2, 0))])
    def test_reproduces_raw_pose(self, joint_graph: PoseRelativeToGraph,
                                 name: str, relative_to: str, expected: Pose):
        pose, errors = resolve_pose(joint_graph, name, relative_to)

        assert errors == []
        assert pose == expected

    def test_relative_to_self(self, joint_graph: PoseRelativeToGraph):
        for name in joint_graph.map:
            assert resolve_pose(joint_graph, name, name) == (Pose.identity(), [])

    @pytest.mark.parametrize('name, relative_to', [('invalid', '__model__'), ('__model__', 'invalid')])
    def test_invalid_name(self, joint_graph: PoseRelativeToGraph, name: str, relative_to: str):
        pose, errors = resolve_pose(joint_graph, name, relative_to)

        assert pose is None
        assert len(errors) == 1
        assert errors[0].code is ErrorCode.POSE_RELATIVE_TO_INVALID
        assert errors[0].kind is ErrorKind.NAME_NOT_FOUND
        assert "PoseRelativeToGraph unable to find unique frame with name [invalid] in graph." \
            in errors[0].message

    def test_short_circuit(self, joint_graph: PoseRelativeToGraph):
        _, errors = resolve_pose(joint_graph, 'first', 'second')

        assert len(errors) == 1 and '[first]' in errors[0].message

    def test_root_invalid_name(self, joint_graph: PoseRelativeToGraph):
        pose, errors = resolve_pose_relative_to_root(joint_graph, 'invalid')

        assert pose is None
        assert [e.kind for e in errors] == [ErrorKind.NAME_NOT_FOUND]

    def test_dangling(self):
        model = two_link_model()
        model.frames = [Frame('F1', relative_to='nowhere'), Frame('F2', relative_to='F1')]
        graph, _ = build_pose_relative_to_graph(model)
        pose, errors = resolve_pose_relative_to_root(graph, 'F2')

        assert pose is None
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR]

    def test_cycle(self):
        model = two_link_model()
        model.frames = [Frame('F1', relative_to='F2'), Frame('F2', relative_to='F1')]
        graph, _ = build_pose_relative_to_graph(model)
        pose, errors = resolve_pose_relative_to_root(graph, 'F1')

        assert pose is None
        assert [e.code for e in errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]

    @pytest.mark.parametrize('poses', [[random_pose() for _ in range(4)] for _ in range(NUM_CHAINS)])
    def test_chain_composition(self, poses: list[Pose]):
        graph, errors = build_pose_relative_to_graph(pose_chain_model(poses))
        assert errors == [] and validate_pose_relative_to_graph(graph) == []

        expected = Pose.identity()
        for i, raw in enumerate(poses):
            expected = expected * raw
            assert resolve_pose_relative_to_root(graph, f"F{i}")[0] == expected
            if i:
                assert resolve_pose(graph, f"F{i}", f"F{i-1}")[0] == raw

    @pytest.mark.parametrize('poses', [[random_pose() for _ in range(4)] for _ in range(NUM_CHAINS)])
    def test_inverse_consistency(self, poses: list[Pose]):
        graph, _ = build_pose_relative_to_graph(pose_chain_model(poses))

        for a, b in [('F0', 'F3'), ('F3', 'L'), ('__model__', 'F2')]:
            ab, _ = resolve_pose(graph, a, b)
            ba, _ = resolve_pose(graph, b, a)
            assert ab * ba == Pose.identity()
