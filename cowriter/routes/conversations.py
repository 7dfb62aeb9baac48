from __future__ import annotations

from flask import Blueprint, jsonify

from cowriter.errors import ConversationNotFound
from cowriter.routes import services

conversations_bp = Blueprint("conversations", __name__)


@conversations_bp.get("/conversations")
def list_conversations():
    return jsonify(
        [
            {"id": c["id"], "projectId": c["project_id"], "projectName": c["project_name"]}
            for c in services().conversations.list_conversations()
        ]
    )


@conversations_bp.get("/projects/<project_id>/conversation")
def get_project_conversation(project_id: str):
    conversation = services().conversations.get_conversation_by_project_id(project_id)
    if conversation is None:
        raise ConversationNotFound(project_id=project_id)
    return jsonify(conversation.model_dump(mode="json", by_alias=True))
