"""sdf.py - SDFormat Model Reader

Reads the frame related subset of an SDFormat ``<model>`` element into
:mod:`frame_semantics.model` value objects. Problems are accumulated as
errors rather than raised.
"""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET

from frame_semantics.config import DEFAULT_CONFIG, FrameSemanticsConfig
from frame_semantics.errors import ErrorCode, FrameSemanticsError, new_error
from frame_semantics.geometry import Pose
from frame_semantics.model import Frame, Joint, JointType, Link, Model

__all__ = ['load_model', 'load_model_file', 'load_pose']

logger = logging.getLogger(__name__)

Errors = list[FrameSemanticsError]

# %% Elements
def load_pose(elem: ET.Element) -> tuple[Pose, str, Errors]:
    """Reads the optional ``<pose>`` child of an element

    :param elem: Posed element
    :type elem: xml.etree.ElementTree.Element

    :return: Raw pose (identity when omitted), relative_to name ('' when
        omitted) and errors
    :rtype: tuple[Pose, str, list[FrameSemanticsError]]
    """
    pose_elem = elem.find('pose')
    if pose_elem is None:
        return Pose(), '', []

    # 'frame' is the deprecated spelling of 'relative_to'
    relative_to = pose_elem.get('relative_to', pose_elem.get('frame', ''))

    text = (pose_elem.text or '').split()
    if not text:
        return Pose(), relative_to, []

    try:
        values = [float(v) for v in text]
    except ValueError:
        values = []

    if len(values) != 6:
        return Pose(), relative_to, [new_error(ErrorCode.POSE_INVALID,
            f"Unable to read pose [{pose_elem.text.strip()}] of {elem.tag} "
            f"[{elem.get('name', '')}], expected six numbers.")]

    return Pose.from_rpy(*values), relative_to, []

def _load_name(elem: ET.Element) -> tuple[str, Errors]:
    name = elem.get('name', '')
    if not name:
        return name, [new_error(ErrorCode.ATTRIBUTE_MISSING,
            f"A {elem.tag} name is required, but is not set.")]
    return name, []

def _load_link(elem: ET.Element) -> tuple[Link, Errors]:
    name, errors = _load_name(elem)
    pose, relative_to, pose_errors = load_pose(elem)
    return Link(name, pose, relative_to), errors + pose_errors

def _load_frame(elem: ET.Element) -> tuple[Frame, Errors]:
    name, errors = _load_name(elem)
    pose, relative_to, pose_errors = load_pose(elem)
    return Frame(name, elem.get('attached_to', ''), pose, relative_to), errors + pose_errors

def _load_joint(elem: ET.Element) -> tuple[Joint, Errors]:
    name, errors = _load_name(elem)
    pose, relative_to, pose_errors = load_pose(elem)
    errors += pose_errors

    links = {}
    for tag in ('parent', 'child'):
        link_elem = elem.find(tag)
        if link_elem is None or not (link_elem.text or '').strip():
            errors.append(new_error(ErrorCode.ELEMENT_MISSING,
                f"The {tag} element of joint [{name}] is missing."))
            links[tag] = ''
        else:
            links[tag] = link_elem.text.strip()

    token = elem.get('type', '')
    joint_type = JointType.parse(token)
    if joint_type is JointType.INVALID:
        errors.append(new_error(ErrorCode.JOINT_TYPE_INVALID,
            f"Joint type [{token}] of joint [{name}] is not valid."))

    return Joint(name, joint_type, links['parent'], links['child'], pose, relative_to), errors

_LOADERS = {'link': _load_link, 'joint': _load_joint, 'frame': _load_frame}

# %% Models
def _load_model_element(elem: ET.Element) -> tuple[Model, Errors]:
    """Reads a ``<model>`` element"""
    name, errors = _load_name(elem)
    pose, relative_to, pose_errors = load_pose(elem)
    errors += pose_errors

    model = Model(name, canonical_link=elem.get('canonical_link', ''),
                  pose=pose, relative_to=relative_to)
    entities = {'link': model.links, 'joint': model.joints, 'frame': model.frames}

    for tag, loader in _LOADERS.items():
        for child in elem.findall(tag):
            entity, entity_errors = loader(child)
            errors += entity_errors

            if entity.name and any(e.name == entity.name for e in entities[tag]):
                errors.append(new_error(ErrorCode.DUPLICATE_NAME,
                    f"{tag.capitalize()} with name [{entity.name}] already exists "
                    f"in model [{name}]. Each {tag} must have a unique name."))
                continue

            entities[tag].append(entity)

    logger.debug("Loaded model [%s] with %d links, %d joints, %d frames",
                 name, model.link_count(), model.joint_count(), model.frame_count())
    return model, errors

def load_model(source: str | ET.Element,
               config: FrameSemanticsConfig = DEFAULT_CONFIG) -> tuple[Model | None, Errors]:
    """Reads the first model of an SDFormat document

    :param source: Document text, ``<sdf>`` element or ``<model>`` element
    :type source: str | xml.etree.ElementTree.Element

    :param config: Configuration, defaults to DEFAULT_CONFIG
    :type config: FrameSemanticsConfig, optional

    :return: Model, None if no model could be read, and errors
    :rtype: tuple[Model | None, list[FrameSemanticsError]]
    """
    if isinstance(source, str):
        try:
            source = ET.fromstring(source)
        except ET.ParseError as err:
            return None, [new_error(ErrorCode.FILE_READ, f"Unable to parse document: {err}")]

    errors = []
    if source.tag == 'sdf':
        version = source.get('version')
        if version is None:
            errors.append(new_error(ErrorCode.ATTRIBUTE_MISSING, "SDF does not have a version."))
        elif version != config.sdf_version:
            logger.warning("Reading SDF version [%s] with frame semantics of version [%s]",
                           version, config.sdf_version)

        elem = source.find('model')
        if elem is None:
            return None, errors + [new_error(ErrorCode.ELEMENT_MISSING,
                "SDF document does not contain a <model>.")]
    elif source.tag == 'model':
        elem = source
    else:
        return None, [new_error(ErrorCode.ELEMENT_INCORRECT_TYPE,
            f"Attempting to load a Model, but the provided element is a <{source.tag}>.")]

    model, model_errors = _load_model_element(elem)
    return model, errors + model_errors

def load_model_file(path: str | os.PathLike,
                    config: FrameSemanticsConfig = DEFAULT_CONFIG) -> tuple[Model | None, Errors]:
    """Reads the first model of an SDFormat file

    :param path: File path
    :type path: str | os.PathLike

    :param config: Configuration, defaults to DEFAULT_CONFIG
    :type config: FrameSemanticsConfig, optional

    :return: Model, None if no model could be read, and errors
    :rtype: tuple[Model | None, list[FrameSemanticsError]]
    """
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as err:
        return None, [new_error(ErrorCode.FILE_READ, f"Unable to read file [{path}]: {err}")]

    return load_model(text, config)
