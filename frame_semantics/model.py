"""model.py - Loaded Model Value Objects"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from frame_semantics.geometry import Pose

__all__ = ['JointType', 'Link', 'Joint', 'Frame', 'Model']

class JointType(Enum):
    """Joint type tokens"""
    BALL       = 'ball'
    CONTINUOUS = 'continuous'
    FIXED      = 'fixed'
    GEARBOX    = 'gearbox'
    PRISMATIC  = 'prismatic'
    REVOLUTE   = 'revolute'
    REVOLUTE2  = 'revolute2'
    SCREW      = 'screw'
    UNIVERSAL  = 'universal'
    INVALID    = 'invalid'

    @classmethod
    def parse(cls, token: str) -> JointType:
        """Case insensitive joint type lookup

        :param token: Joint type token
        :type token: str

        :return: Joint type, :code:`JointType.INVALID` if unrecognized
        :rtype: JointType
        """
        try:
            return cls(token.strip().lower())
        except ValueError:
            return cls.INVALID

@dataclass
class Link:
    """Rigid body

    :param name: Link name
    :type name: str

    :param pose: Raw link pose, defaults to identity
    :type pose: Pose, optional

    :param relative_to: Frame the pose is expressed in, defaults to '' (model frame)
    :type relative_to: str, optional
    """
    name: str
    pose: Pose = field(default_factory=Pose)
    relative_to: str = ''

@dataclass
class Joint:
    """Connection between a parent and a child link

    :param name: Joint name
    :type name: str

    :param type: Joint type, defaults to :code:`JointType.INVALID`
    :type type: JointType, optional

    :param parent: Parent link name, defaults to ''
    :type parent: str, optional

    :param child: Child link name, defaults to ''
    :type child: str, optional

    :param pose: Raw joint pose, defaults to identity
    :type pose: Pose, optional

    :param relative_to: Frame the pose is expressed in, defaults to '' (child link)
    :type relative_to: str, optional
    """
    name: str
    type: JointType = JointType.INVALID
    parent: str = ''
    child: str = ''
    pose: Pose = field(default_factory=Pose)
    relative_to: str = ''

@dataclass
class Frame:
    """Explicit named frame

    :param name: Frame name
    :type name: str

    :param attached_to: Frame, link or joint this frame is attached to, defaults to '' (model frame)
    :type attached_to: str, optional

    :param pose: Raw frame pose, defaults to identity
    :type pose: Pose, optional

    :param relative_to: Frame the pose is expressed in, defaults to '' (`attached_to`)
    :type relative_to: str, optional
    """
    name: str
    attached_to: str = ''
    pose: Pose = field(default_factory=Pose)
    relative_to: str = ''

@dataclass
class Model:
    """Loaded model consisting of links, joints and explicit frames

    :param name: Model name
    :type name: str

    :param links: Links in declaration order, defaults to []
    :type links: list[Link], optional

    :param joints: Joints in declaration order, defaults to []
    :type joints: list[Joint], optional

    :param frames: Explicit frames in declaration order, defaults to []
    :type frames: list[Frame], optional

    :param canonical_link: Link the model frame is attached to, defaults to '' (first link)
    :type canonical_link: str, optional

    :param pose: Raw model pose, defaults to identity
    :type pose: Pose, optional

    :param relative_to: Frame the model pose is expressed in, defaults to ''
    :type relative_to: str, optional
    """
    name: str
    links: list[Link] = field(default_factory=list)
    joints: list[Joint] = field(default_factory=list)
    frames: list[Frame] = field(default_factory=list)
    canonical_link: str = ''
    pose: Pose = field(default_factory=Pose)
    relative_to: str = ''

    @property
    def canonical_link_name(self) -> str:
        """Returns explicit canonical link name or the first link name

        :return: Canonical link name, '' if the model has no links
        :rtype: str
        """
        if self.canonical_link:
            return self.canonical_link
        return self.links[0].name if self.links else ''

    def link(self, name: str) -> Link | None:
        return next((l for l in self.links if l.name == name), None)

    def joint(self, name: str) -> Joint | None:
        return next((j for j in self.joints if j.name == name), None)

    def frame(self, name: str) -> Frame | None:
        return next((f for f in self.frames if f.name == name), None)

    def link_count(self) -> int:
        return len(self.links)

    def joint_count(self) -> int:
        return len(self.joints)

    def frame_count(self) -> int:
        return len(self.frames)
