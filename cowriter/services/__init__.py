"""Service layer package housing core business logic.

Contains the project and conversation stores, the OpenAI conversation
orchestration, vector store file ingestion, and project export. Routes
reach them through the ``Services`` bundle built by the app factory.
"""

from __future__ import annotations

from dataclasses import dataclass

from cowriter.services.conversation_store import ConversationStore
from cowriter.services.export_service import ProjectExporter
from cowriter.services.llm_service import AIContext, LLMService
from cowriter.services.project_store import ProjectStore
from cowriter.services.vectorstore_service import VectorStoreService


@dataclass(frozen=True)
class Services:
    projects: ProjectStore
    conversations: ConversationStore
    vector_stores: VectorStoreService
    llm: LLMService
    exporter: ProjectExporter
    ai_context: AIContext
