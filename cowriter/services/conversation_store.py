"""ConversationStore: append-only log of a project's message exchanges.

One document per conversation under ``{DB_DIR}/conversations/{id}.json``.
Conversations are looked up by project by scanning the registry.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from cowriter.config import Config
from cowriter.errors import ConversationNotFound
from cowriter.schemas import Conversation, MessageExchange
from cowriter.utils.ids import is_valid_id, new_id
from cowriter.utils.io_utils import ensure_dir, list_json, read_json, remove_file, write_json


class ConversationStore:
    def __init__(self, cfg: Config = Config, db_dir: Optional[str] = None):
        self.cfg = cfg
        self.conversations_dir = os.path.join(db_dir or cfg.DB_DIR, "conversations")
        ensure_dir(self.conversations_dir)

    def _path(self, conversation_id: str) -> Optional[str]:
        if not is_valid_id(conversation_id):
            return None
        return os.path.join(self.conversations_dir, f"{conversation_id}.json")

    def _iter_docs(self):
        for path in list_json(self.conversations_dir):
            doc = read_json(path, default=None)
            if isinstance(doc, dict):
                yield path, doc

    def _find_by_project(self, project_id: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        for path, doc in self._iter_docs():
            if doc.get("project_id") == project_id:
                return path, doc
        return None

    def create_conversation(self, project_id: str, project_name: str) -> str:
        conversation = Conversation(id=new_id("conversation"), project_id=project_id, project_name=project_name)
        write_json(self._path(conversation.id), conversation.model_dump(mode="json"))
        return conversation.id

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        path = self._path(conversation_id)
        doc = read_json(path, default=None) if path else None
        return Conversation.model_validate(doc) if isinstance(doc, dict) else None

    def get_conversation_by_project_id(self, project_id: str) -> Optional[Conversation]:
        found = self._find_by_project(project_id)
        return Conversation.model_validate(found[1]) if found else None

    def list_conversations(self) -> List[Dict[str, str]]:
        return [
            {"id": doc["id"], "project_id": doc["project_id"], "project_name": doc.get("project_name", "")}
            for _, doc in self._iter_docs()
        ]

    def add_message_exchange(self, project_id: str, exchange: MessageExchange) -> None:
        found = self._find_by_project(project_id)
        if found is None:
            raise ConversationNotFound(project_id=project_id)
        path, doc = found
        doc.setdefault("messages", []).append(exchange.model_dump(mode="json"))
        write_json(path, doc)

    def delete_conversation(self, conversation_id: str) -> None:
        path = self._path(conversation_id)
        if path is None or not remove_file(path):
            raise ConversationNotFound(conversation_id)
