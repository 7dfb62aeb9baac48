"""Section routes: /projects/<project_id>/sections[/<section_id>[/ask|/improve]]

``ask`` and ``improve`` send a section-scoped prompt through the project's
conversation and record the exchange in the section history. The improved
or answered text becomes the section's current content.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from cowriter.errors import ProjectNotFound, SectionNotFound
from cowriter.prompts.project_templates import section_improve_prefix, section_prompt_prefix
from cowriter.routes import parse_body, services
from cowriter.schemas import HistoryMessage, Prompt, Section, SectionNameRequest, SectionPromptRequest

sections_bp = Blueprint("sections", __name__)


def _require_section(project_id: str, section_id: str) -> Section:
    project = services().projects.get_project(project_id, ["sections"])
    if project is None:
        raise ProjectNotFound(project_id)
    section = project.find_section(section_id)
    if section is None:
        raise SectionNotFound(project_id, section_id)
    return section


def _send_section_prompt(project_id: str, section_id: str, prompt: str, prefix: str, reply_type: str) -> str:
    svc = services()
    response = svc.llm.send_message(
        project_id,
        Prompt(model=current_app.config["OPENAI_MODEL"], user_text=prefix + prompt),
    )
    svc.projects.add_section_message(project_id, section_id, HistoryMessage(content=prompt, type="request"))
    svc.projects.add_section_message(
        project_id, section_id, HistoryMessage(content=response.output_text, type=reply_type)
    )
    return response.output_text


@sections_bp.post("/projects/<project_id>/sections")
def create_section(project_id: str):
    body = parse_body(SectionNameRequest)
    section_id = services().projects.create_section(project_id, body.name)
    return jsonify({"id": section_id}), 201


@sections_bp.patch("/projects/<project_id>/sections/<section_id>")
def update_section(project_id: str, section_id: str):
    body = parse_body(SectionNameRequest)
    services().projects.update_section(project_id, section_id, name=body.name)
    return "", 204


@sections_bp.post("/projects/<project_id>/sections/<section_id>/ask")
def ask_section(project_id: str, section_id: str):
    body = parse_body(SectionPromptRequest)
    section = _require_section(project_id, section_id)
    output = _send_section_prompt(
        project_id, section_id, body.prompt, section_prompt_prefix(section.name), "response"
    )
    return jsonify({"output": output})


@sections_bp.post("/projects/<project_id>/sections/<section_id>/improve")
def improve_section(project_id: str, section_id: str):
    """Log the instruction as ``request`` and the rewritten text as ``improve``, then return it."""
    body = parse_body(SectionPromptRequest)
    section = _require_section(project_id, section_id)
    output = _send_section_prompt(
        project_id, section_id, body.prompt, section_improve_prefix(section.name), "improve"
    )
    return jsonify({"output": output})


@sections_bp.delete("/projects/<project_id>/sections/<section_id>")
def delete_section(project_id: str, section_id: str):
    services().projects.delete_section(project_id, section_id)
    return "", 204
