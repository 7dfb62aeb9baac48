"""LLMService: runs one turn of a project's OpenAI conversation.

Every prompt for a project is threaded through a single upstream
conversation via the Responses API ``previous_response_id``. The service
never rebuilds history itself. Each turn is recorded in two places, in this
order: the project's ``last_response_id`` and the conversation log. Only
then is an upstream error payload raised.

File search draws on the project's own vector store and the process-wide
shared one, held in an ``AIContext`` built at start-up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from cowriter.errors import AIResponseError, ProjectNotFound
from cowriter.schemas import AIResponse, MessageExchange, Prompt, UserPrompt
from cowriter.services.conversation_store import ConversationStore
from cowriter.services.project_store import ProjectStore
from cowriter.services.vectorstore_service import VectorStoreService


@dataclass(frozen=True)
class AIContext:
    shared_vector_store_id: str


def build_ai_context(vector_stores: VectorStoreService, shared_vector_store_name: str) -> AIContext:
    shared_id = vector_stores.find_or_create_vector_store(shared_vector_store_name)
    logging.info(f"Shared vector store: {shared_id}")
    return AIContext(shared_vector_store_id=shared_id)


def _as_dict(obj: Any) -> Optional[Dict[str, Any]]:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return dict(obj)
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return dict(vars(obj))


def extract_output_text(output: List[Any]) -> str:
    """Join the text (or refusal) of every message content segment with newlines."""
    parts = []
    for item in output:
        if getattr(item, "type", None) != "message":
            continue
        for segment in item.content:
            if segment.type == "refusal":
                parts.append(segment.refusal)
            else:
                parts.append(segment.text)
    return "\n".join(parts)


class LLMService:
    def __init__(
        self,
        client: OpenAI,
        projects: ProjectStore,
        conversations: ConversationStore,
        context: AIContext,
    ):
        self.client = client
        self.projects = projects
        self.conversations = conversations
        self.context = context

    def _build_input(self, prompt: Prompt) -> List[Dict[str, str]]:
        turns = []
        if prompt.system_text is not None:
            turns.append({"role": "system", "content": prompt.system_text})
        if prompt.developer_text is not None:
            turns.append({"role": "developer", "content": prompt.developer_text})
        turns.append({"role": "user", "content": prompt.user_text})
        return turns

    def send_message(self, project_id: str, prompt: Prompt) -> AIResponse:
        project = self.projects.get_project(project_id, ["vector_store_id", "last_response_id"])
        if project is None:
            raise ProjectNotFound(project_id)

        tools = [
            {
                "type": "file_search",
                "vector_store_ids": [project.vector_store_id, self.context.shared_vector_store_id],
            }
        ]
        response = self.client.responses.create(
            model=prompt.model,
            input=self._build_input(prompt),
            tools=tools,
            previous_response_id=project.last_response_id,
        )

        # The turn is consumed even when the response reports an error
        self.projects.update_last_response_id(project_id, response.id)

        status = response.status or "incomplete"
        result = AIResponse(
            id=response.id,
            created_at=response.created_at,
            model=response.model,
            status=status,
            output_text=extract_output_text(response.output or []),
            error=_as_dict(response.error),
            incomplete_details=_as_dict(response.incomplete_details),
        )
        logging.info(f"Project {project_id}: response {result.id} status={status}")

        self.conversations.add_message_exchange(
            project_id,
            MessageExchange(
                user_prompt=UserPrompt(text=prompt.user_text, developer_text=prompt.developer_text),
                ai_response=result,
            ),
        )

        if result.error is not None:
            raise AIResponseError(result.id, result.error, status, result.incomplete_details)
        return result
