"""ProjectStore: JSON-backed persistence of the Project aggregate.

Each project is one document under ``{DB_DIR}/projects/{project_id}.json``.
Every mutation is a single read-modify-write of that document followed by an
atomic replace, so paired updates (``sections`` + ``section_order``) land
together or not at all. No in-process locking: concurrent writers on the
same project can race.

Also hosts the section ordering algorithm shared with the exporter.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from cowriter.config import Config
from cowriter.errors import InvalidInput, ProjectNotFound, SectionNotFound
from cowriter.schemas import HistoryMessage, Project, Section
from cowriter.utils.ids import is_valid_id, new_id
from cowriter.utils.io_utils import ensure_dir, list_json, read_json, remove_file, write_json


def resolve_section_order(project_id: str, sections: Iterable[Section], section_order: List[str]) -> List[Section]:
    """Return ``sections`` sorted by their position in ``section_order``.

    Raises SectionNotFound for the first section whose id is missing from
    the order; sections are never dropped or silently reordered.
    """
    positions = {sid: pos for pos, sid in enumerate(section_order)}
    placed = []
    for section in sections:
        pos = positions.get(section.id)
        if pos is None:
            raise SectionNotFound(project_id, section.id)
        placed.append((pos, section))
    placed.sort(key=lambda item: item[0])
    return [section for _, section in placed]


def ordered_sections(project_id: str, project: Project) -> List[Section]:
    return resolve_section_order(project_id, project.sections, project.section_order)


class ProjectStore:
    """CRUD over projects and their sections."""

    def __init__(self, cfg: Config = Config, db_dir: Optional[str] = None):
        self.cfg = cfg
        self.projects_dir = os.path.join(db_dir or cfg.DB_DIR, "projects")
        ensure_dir(self.projects_dir)

    def _path(self, project_id: str) -> Optional[str]:
        if not is_valid_id(project_id):
            return None
        return os.path.join(self.projects_dir, f"{project_id}.json")

    def _load(self, project_id: str) -> Dict[str, Any]:
        path = self._path(project_id)
        doc = read_json(path, default=None) if path else None
        if not isinstance(doc, dict):
            raise ProjectNotFound(project_id)
        return doc

    def _save(self, doc: Dict[str, Any]) -> None:
        write_json(self._path(doc["id"]), doc)

    # -------- Projects --------

    def create_project(self, name: str, context: str, vector_store_id: str) -> str:
        project = Project(id=new_id("project"), name=name, context=context, vector_store_id=vector_store_id)
        self._save(project.model_dump(mode="json"))
        logging.debug(f"Created project {project.id}")
        return project.id

    def list_projects(self) -> List[Dict[str, str]]:
        out = []
        for path in list_json(self.projects_dir):
            doc = read_json(path, default=None)
            if isinstance(doc, dict):
                out.append({"id": doc["id"], "name": doc.get("name", "")})
        return out

    def get_project(self, project_id: str, fields: Optional[Iterable[str]] = None) -> Optional[Project]:
        """Read a project, optionally keeping only ``fields`` (``id`` is always kept).

        Returns None when the project does not exist.
        """
        try:
            doc = self._load(project_id)
        except ProjectNotFound:
            return None
        if fields is not None:
            wanted = set(fields)
            unknown = wanted - set(Project.model_fields)
            if unknown:
                raise InvalidInput(f"fields among {sorted(Project.model_fields)}", sorted(unknown))
            doc = {k: v for k, v in doc.items() if k in wanted or k == "id"}
        return Project.model_validate(doc)

    def update_project_info(
        self,
        project_id: str,
        *,
        name: Optional[str] = None,
        context: Optional[str] = None,
        section_order: Optional[List[str]] = None,
    ) -> None:
        doc = self._load(project_id)
        if name is not None:
            doc["name"] = name
        if context is not None:
            doc["context"] = context
        if section_order is not None:
            current = [s["id"] for s in doc.get("sections", [])]
            if len(section_order) != len(current) or set(section_order) != set(current):
                raise InvalidInput(f"a permutation of section ids {current}", section_order)
            doc["section_order"] = list(section_order)
        self._save(doc)

    def update_last_response_id(self, project_id: str, response_id: str) -> None:
        doc = self._load(project_id)
        doc["last_response_id"] = response_id
        self._save(doc)

    def delete_project(self, project_id: str) -> None:
        path = self._path(project_id)
        if path is None or not remove_file(path):
            raise ProjectNotFound(project_id)
        logging.debug(f"Deleted project {project_id}")

    # -------- Sections --------

    def create_section(self, project_id: str, name: str) -> str:
        doc = self._load(project_id)
        section = Section(id=new_id("section"), name=name)
        doc.setdefault("sections", []).append(section.model_dump(mode="json"))
        doc.setdefault("section_order", []).append(section.id)
        self._save(doc)
        return section.id

    def _find_section(self, doc: Dict[str, Any], project_id: str, section_id: str) -> Dict[str, Any]:
        for section in doc.get("sections", []):
            if section["id"] == section_id:
                return section
        raise SectionNotFound(project_id, section_id)

    def update_section(self, project_id: str, section_id: str, *, name: str) -> None:
        doc = self._load(project_id)
        self._find_section(doc, project_id, section_id)["name"] = name
        self._save(doc)

    def add_section_message(self, project_id: str, section_id: str, message: HistoryMessage) -> None:
        doc = self._load(project_id)
        section = self._find_section(doc, project_id, section_id)
        section.setdefault("history", []).append(message.model_dump(mode="json"))
        self._save(doc)

    def delete_section(self, project_id: str, section_id: str) -> None:
        """Remove the section and its order entry together.

        A missing section or order entry is reported as ProjectNotFound,
        like a missing project.
        """
        doc = self._load(project_id)
        sections = doc.get("sections", [])
        order = doc.get("section_order", [])
        remaining = [s for s in sections if s["id"] != section_id]
        if len(remaining) == len(sections) or section_id not in order:
            raise ProjectNotFound(project_id)
        doc["sections"] = remaining
        doc["section_order"] = [sid for sid in order if sid != section_id]
        self._save(doc)
