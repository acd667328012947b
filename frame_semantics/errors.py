"""errors.py - Frame Semantics Error Codes and Records"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

__all__ = ['ErrorKind', 'ErrorCode', 'FrameSemanticsError', 'new_error']

logger = logging.getLogger(__name__)

class ErrorKind(Enum):
    """Broad classification of frame semantics errors"""
    REFERENCE_MISSING    = 'ReferenceMissing'
    GRAPH_CYCLE          = 'GraphCycle'
    AMBIGUOUS_RESOLUTION = 'AmbiguousResolution'
    NAME_NOT_FOUND       = 'NameNotFound'
    STRUCTURE            = 'Structure'
    DOCUMENT             = 'Document'

class ErrorCode(Enum):
    """Specific error codes reported by readers, builders, validators and resolvers"""
    # Model reader
    FILE_READ              = 'file_read'
    ELEMENT_INCORRECT_TYPE = 'element_incorrect_type'
    ELEMENT_MISSING        = 'element_missing'
    ATTRIBUTE_MISSING      = 'attribute_missing'
    POSE_INVALID           = 'pose_invalid'
    JOINT_TYPE_INVALID     = 'joint_type_invalid'

    # Model structure
    DUPLICATE_NAME                = 'duplicate_name'
    MODEL_WITHOUT_LINK            = 'model_without_link'
    MODEL_CANONICAL_LINK_INVALID  = 'model_canonical_link_invalid'
    JOINT_PARENT_LINK_INVALID     = 'joint_parent_link_invalid'
    JOINT_CHILD_LINK_INVALID      = 'joint_child_link_invalid'

    # Graphs
    KINEMATIC_GRAPH_CYCLE         = 'kinematic_graph_cycle'
    KINEMATIC_GRAPH_ERROR         = 'kinematic_graph_error'
    FRAME_ATTACHED_TO_INVALID     = 'frame_attached_to_invalid'
    FRAME_ATTACHED_TO_CYCLE       = 'frame_attached_to_cycle'
    FRAME_ATTACHED_TO_GRAPH_ERROR = 'frame_attached_to_graph_error'
    POSE_RELATIVE_TO_INVALID      = 'pose_relative_to_invalid'
    POSE_RELATIVE_TO_CYCLE        = 'pose_relative_to_cycle'
    POSE_RELATIVE_TO_GRAPH_ERROR  = 'pose_relative_to_graph_error'

    @property
    def kind(self) -> ErrorKind:
        """Returns default error kind of the code

        :return: Error kind
        :rtype: ErrorKind
        """
        return _CODE_KIND[self]

_CODE_KIND = {
    ErrorCode.FILE_READ:                     ErrorKind.DOCUMENT,
    ErrorCode.ELEMENT_INCORRECT_TYPE:        ErrorKind.DOCUMENT,
    ErrorCode.ELEMENT_MISSING:               ErrorKind.DOCUMENT,
    ErrorCode.ATTRIBUTE_MISSING:             ErrorKind.DOCUMENT,
    ErrorCode.POSE_INVALID:                  ErrorKind.DOCUMENT,
    ErrorCode.JOINT_TYPE_INVALID:            ErrorKind.DOCUMENT,
    ErrorCode.DUPLICATE_NAME:                ErrorKind.STRUCTURE,
    ErrorCode.MODEL_WITHOUT_LINK:            ErrorKind.STRUCTURE,
    ErrorCode.MODEL_CANONICAL_LINK_INVALID:  ErrorKind.REFERENCE_MISSING,
    ErrorCode.JOINT_PARENT_LINK_INVALID:     ErrorKind.REFERENCE_MISSING,
    ErrorCode.JOINT_CHILD_LINK_INVALID:      ErrorKind.REFERENCE_MISSING,
    ErrorCode.KINEMATIC_GRAPH_CYCLE:         ErrorKind.GRAPH_CYCLE,
    ErrorCode.KINEMATIC_GRAPH_ERROR:         ErrorKind.AMBIGUOUS_RESOLUTION,
    ErrorCode.FRAME_ATTACHED_TO_INVALID:     ErrorKind.REFERENCE_MISSING,
    ErrorCode.FRAME_ATTACHED_TO_CYCLE:       ErrorKind.GRAPH_CYCLE,
    ErrorCode.FRAME_ATTACHED_TO_GRAPH_ERROR: ErrorKind.AMBIGUOUS_RESOLUTION,
    ErrorCode.POSE_RELATIVE_TO_INVALID:      ErrorKind.REFERENCE_MISSING,
    ErrorCode.POSE_RELATIVE_TO_CYCLE:        ErrorKind.GRAPH_CYCLE,
    ErrorCode.POSE_RELATIVE_TO_GRAPH_ERROR:  ErrorKind.AMBIGUOUS_RESOLUTION,
}

@dataclass(frozen=True)
class FrameSemanticsError:
    """Recoverable error record returned by value

    :param code: Error code
    :type code: ErrorCode

    :param message: Human readable description
    :type message: str

    :param kind: Error kind, defaults to the kind of `code`
    :type kind: ErrorKind | None, optional
    """
    code: ErrorCode
    message: str
    kind: ErrorKind = field(default=None)

    def __post_init__(self):
        if self.kind is None:
            object.__setattr__(self, 'kind', self.code.kind)

    def __str__(self) -> str:
        return f"Error Code {self.code.name}: {self.message}"

def new_error(code: ErrorCode, message: str,
              kind: ErrorKind | None = None) -> FrameSemanticsError:
    """Creates and logs an error record

    :param code: Error code
    :type code: ErrorCode

    :param message: Human readable description
    :type message: str

    :param kind: Error kind override, defaults to None
    :type kind: ErrorKind | None, optional

    :return: Error record
    :rtype: FrameSemanticsError
    """
    error = FrameSemanticsError(code, message, kind)
    logger.debug(str(error))
    return error
