"""Domain models and request/response schemas.

Holds Pydantic models for the Project and Conversation aggregates as they
are persisted, the prompt handed to the LLM orchestration, and the payloads
accepted by the routes. Field names are snake_case in storage and camelCase
on the wire.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HistoryType = Literal["request", "response", "improve"]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryMessage(_Model):
    content: str
    type: HistoryType


class Section(_Model):
    id: str
    name: str
    history: List[HistoryMessage] = Field(default_factory=list)

    @property
    def current_content(self) -> Optional[HistoryMessage]:
        return self.history[-1] if self.history else None


class Project(_Model):
    """Project aggregate. Every field has a default so projected reads validate."""

    id: str = ""
    name: str = ""
    context: str = ""
    vector_store_id: str = ""
    last_response_id: Optional[str] = None
    sections: List[Section] = Field(default_factory=list)
    section_order: List[str] = Field(default_factory=list)

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


class UserPrompt(_Model):
    text: str
    developer_text: Optional[str] = None


class AIResponse(_Model):
    id: str
    created_at: float
    model: str
    status: str
    output_text: str
    error: Optional[Dict[str, Any]] = None
    incomplete_details: Optional[Dict[str, Any]] = None


class MessageExchange(_Model):
    user_prompt: UserPrompt
    ai_response: AIResponse


class Conversation(_Model):
    id: str
    project_id: str
    project_name: str
    messages: List[MessageExchange] = Field(default_factory=list)


class Prompt(_Model):
    """One turn to send into a project's conversation."""

    model: str
    user_text: str
    developer_text: Optional[str] = None
    system_text: Optional[str] = None


# -------- Request payloads --------

class CreateProjectRequest(_Model):
    name: str = Field(min_length=1)
    context: str


class UpdateProjectRequest(_Model):
    name: Optional[str] = Field(default=None, min_length=1)
    context: Optional[str] = None
    section_order: Optional[List[str]] = None


class SectionNameRequest(_Model):
    name: str = Field(min_length=1)


class SectionPromptRequest(_Model):
    prompt: str = Field(min_length=1)
