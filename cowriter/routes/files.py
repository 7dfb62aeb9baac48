"""Search-file routes for the shared and per-project vector stores.

- POST/GET /search-files/shared, DELETE /search-files/shared/<file_id>
- POST/GET /projects/<project_id>/search-files,
  DELETE /projects/<project_id>/search-files/<file_id>

Uploads are multipart with one or more ``files`` parts. The request returns
only once every file is searchable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from flask import Blueprint, jsonify, request

from cowriter.errors import ProjectNotFound
from cowriter.routes import services

files_bp = Blueprint("files", __name__)


def _resp_error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _project_vector_store_id(project_id: str) -> str:
    project = services().projects.get_project(project_id, ["vector_store_id"])
    if project is None:
        raise ProjectNotFound(project_id)
    return project.vector_store_id


def _request_files() -> List[Tuple[str, Any]]:
    return [(f.filename, f.stream) for f in request.files.getlist("files") if f and f.filename]


def _upload(vector_store_id: str):
    files = _request_files()
    if not files:
        return _resp_error("No files selected for upload.")
    result: List[Dict[str, str]] = services().vector_stores.upload_files(vector_store_id, files)
    return jsonify(result), 201


def _delete(vector_store_id: str, file_id: str):
    vector_stores = services().vector_stores
    vector_stores.remove_file_from_vector(file_id, vector_store_id)
    vector_stores.delete_file(file_id)
    return "", 204


@files_bp.post("/search-files/shared")
def upload_shared_files():
    return _upload(services().ai_context.shared_vector_store_id)


@files_bp.get("/search-files/shared")
def list_shared_files():
    return jsonify(services().vector_stores.describe_files(services().ai_context.shared_vector_store_id))


@files_bp.delete("/search-files/shared/<file_id>")
def delete_shared_file(file_id: str):
    return _delete(services().ai_context.shared_vector_store_id, file_id)


@files_bp.post("/projects/<project_id>/search-files")
def upload_project_files(project_id: str):
    return _upload(_project_vector_store_id(project_id))


@files_bp.get("/projects/<project_id>/search-files")
def list_project_files(project_id: str):
    return jsonify(services().vector_stores.describe_files(_project_vector_store_id(project_id)))


@files_bp.delete("/projects/<project_id>/search-files/<file_id>")
def delete_project_file(project_id: str, file_id: str):
    return _delete(_project_vector_store_id(project_id), file_id)
