"""Domain errors and their HTTP status mapping.

Every error raised by the stores, the LLM orchestration and the exporter is
a ``CowriterError`` carrying an ``ErrorKind`` discriminant. The HTTP layer
never inspects concrete classes: it looks the kind up in ``ERROR_STATUS``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"
    INVALID_INPUT = "invalid_input"


ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.INVALID_INPUT: 400,
}


class CowriterError(RuntimeError):
    """Base class for every named failure of the service."""

    kind: ErrorKind = ErrorKind.UPSTREAM


def status_for(error: CowriterError) -> int:
    return ERROR_STATUS[error.kind]


class ProjectNotFound(CowriterError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, project_id: str):
        super().__init__(f"project with id {project_id} does not exist")
        self.project_id = project_id


class SectionNotFound(CowriterError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, project_id: str, section_id: str):
        super().__init__(f"section with id {section_id} does not exist in project {project_id}")
        self.project_id = project_id
        self.section_id = section_id


class ConversationNotFound(CowriterError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, conversation_id: Optional[str] = None, *, project_id: Optional[str] = None):
        if conversation_id is not None:
            msg = f"conversation with id {conversation_id} does not exist"
        else:
            msg = f"conversation for project with id {project_id} does not exist"
        super().__init__(msg)
        self.conversation_id = conversation_id
        self.project_id = project_id


class SectionUncompleted(CowriterError):
    """Export attempted while a section still has no history."""

    kind = ErrorKind.CONFLICT

    def __init__(self, project_id: str, section_id: str):
        super().__init__(f"section with id {section_id} of project {project_id} has no content yet")
        self.project_id = project_id
        self.section_id = section_id


class AIResponseError(CowriterError):
    """Upstream response carried an error payload.

    Raised only after the continuation token and the message exchange have
    been persisted.
    """

    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        response_id: str,
        error: Dict[str, Any],
        status: str,
        incomplete_details: Optional[Dict[str, Any]] = None,
    ):
        lines = [
            f"OpenAI response with id {response_id} failed with:",
            f"- Status: {status}",
            f"- Error code: {error.get('code')}",
            f"- Error message: {error.get('message')}",
        ]
        if incomplete_details is not None:
            lines.append(f"- Incomplete details: {incomplete_details.get('reason')}")
        super().__init__("\n".join(lines))
        self.response_id = response_id
        self.error = error
        self.status = status
        self.incomplete_details = incomplete_details


class InvalidInput(CowriterError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, expected: str, actual: Any):
        super().__init__(f"Invalid input error -\nExpected: {expected}\nActual: {actual}")
        self.expected = expected
        self.actual = actual
