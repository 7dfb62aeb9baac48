"""Export routes: POST /projects/<project_id>/export/{markdown,docx}

Both render the latest content of every section in section order; an
incomplete section yields 409 and no document.
"""

from __future__ import annotations

import re

from flask import Blueprint, Response

from cowriter.errors import ProjectNotFound
from cowriter.routes import services
from cowriter.schemas import Project
from cowriter.services.export_service import DOCX_MIMETYPE

export_bp = Blueprint("export", __name__)


def _load_project(project_id: str) -> Project:
    project = services().projects.get_project(project_id, ["name", "sections", "section_order"])
    if project is None:
        raise ProjectNotFound(project_id)
    return project


def _download_name(project: Project, ext: str) -> str:
    base = re.sub(r"[^A-Za-z0-9._-]+", "_", project.name).strip("_") or "project"
    return f"{base}.{ext}"


@export_bp.post("/projects/<project_id>/export/markdown")
def export_markdown(project_id: str):
    project = _load_project(project_id)
    markdown = services().exporter.export_to_markdown(project_id, project)
    return Response(markdown, mimetype="text/markdown")


@export_bp.post("/projects/<project_id>/export/docx")
def export_docx(project_id: str):
    project = _load_project(project_id)
    data = services().exporter.export_to_docx(project_id, project)
    return Response(
        data,
        mimetype=DOCX_MIMETYPE,
        headers={"Content-Disposition": f'attachment; filename="{_download_name(project, "docx")}"'},
    )
