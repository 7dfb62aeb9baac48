"""Project routes: /projects and /projects/<project_id>

Creating a project also provisions its vector store and conversation, then
sends the project context as the first turn of the conversation.
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify

from cowriter.errors import ProjectNotFound
from cowriter.prompts.project_templates import PROJECT_CONTEXT_PREFIX, PROJECT_DEVELOPER_TEXT
from cowriter.routes import parse_body, services
from cowriter.schemas import CreateProjectRequest, Prompt, UpdateProjectRequest
from cowriter.services.project_store import ordered_sections

projects_bp = Blueprint("projects", __name__)


@projects_bp.post("/projects")
def create_project():
    body = parse_body(CreateProjectRequest)
    svc = services()

    vector_store_id = svc.vector_stores.create_vector_store(body.name)
    project_id = svc.projects.create_project(body.name, body.context, vector_store_id)
    svc.conversations.create_conversation(project_id, body.name)
    logging.info(f"Created project {project_id} with vector store {vector_store_id}")

    svc.llm.send_message(
        project_id,
        Prompt(
            model=current_app.config["OPENAI_MODEL"],
            user_text=PROJECT_CONTEXT_PREFIX + body.context,
            developer_text=PROJECT_DEVELOPER_TEXT,
        ),
    )
    return jsonify({"id": project_id}), 201


@projects_bp.get("/projects")
def list_projects():
    return jsonify(services().projects.list_projects())


@projects_bp.get("/projects/<project_id>")
def get_project(project_id: str):
    project = services().projects.get_project(project_id, ["name", "context", "sections", "section_order"])
    if project is None:
        raise ProjectNotFound(project_id)
    sections = ordered_sections(project_id, project)
    return jsonify(
        {
            "id": project_id,
            "name": project.name,
            "context": project.context,
            "sections": [s.model_dump(mode="json", by_alias=True) for s in sections],
        }
    )


@projects_bp.patch("/projects/<project_id>")
def update_project(project_id: str):
    body = parse_body(UpdateProjectRequest)
    services().projects.update_project_info(
        project_id,
        name=body.name,
        context=body.context,
        section_order=body.section_order,
    )
    return "", 204


@projects_bp.delete("/projects/<project_id>")
def delete_project(project_id: str):
    svc = services()
    project = svc.projects.get_project(project_id, ["vector_store_id"])
    if project is None:
        raise ProjectNotFound(project_id)

    svc.projects.delete_project(project_id)
    conversation = svc.conversations.get_conversation_by_project_id(project_id)
    if conversation is not None:
        svc.conversations.delete_conversation(conversation.id)
    else:
        logging.warning(f"Project {project_id} had no conversation to delete")
    svc.vector_stores.delete_vector_store(project.vector_store_id)
    return "", 204
