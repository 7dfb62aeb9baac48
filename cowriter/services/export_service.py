"""ProjectExporter: render a project as Markdown or DOCX.

Flow:
  - Order the sections with the project store's ordering algorithm.
  - Take the last history entry of each section as its content; a section
    without history aborts the whole export.
  - Stitch a single Markdown document: project title, rule, one level-2
    heading per section.
  - For DOCX, convert that Markdown with Pandoc, optionally applying a
    reference doc for styles.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Callable, List, Optional

import pypandoc

from cowriter.config import Config
from cowriter.errors import SectionUncompleted
from cowriter.schemas import Project
from cowriter.services.project_store import ordered_sections

DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MarkdownConverter = Callable[[str], bytes]


def pandoc_markdown_to_docx(markdown: str, reference_doc: Optional[str] = None) -> bytes:
    extra_args: List[str] = []
    if reference_doc and os.path.exists(reference_doc):
        extra_args.append(f"--reference-doc={reference_doc}")

    with tempfile.TemporaryDirectory(prefix="cowriter-export-") as tmp:
        out_path = os.path.join(tmp, "project.docx")
        pypandoc.convert_text(markdown, "docx", format="markdown", outputfile=out_path, extra_args=extra_args)
        with open(out_path, "rb") as f:
            return f.read()


class ProjectExporter:
    def __init__(self, cfg: Config = Config, converter: Optional[MarkdownConverter] = None):
        self.cfg = cfg
        self.converter = converter or (lambda md: pandoc_markdown_to_docx(md, cfg.PANDOC_REFERENCE_DOC))

    def export_to_markdown(self, project_id: str, project: Project) -> str:
        parts = [f"# {project.name}\n\n---\n"]
        for section in ordered_sections(project_id, project):
            content = section.current_content
            if content is None:
                raise SectionUncompleted(project_id, section.id)
            parts.append(f"\n## {section.name}\n\n{content.content}\n")
        return "".join(parts)

    def export_to_docx(self, project_id: str, project: Project) -> bytes:
        markdown = self.export_to_markdown(project_id, project)
        logging.info(f"Converting project {project_id} to DOCX ({len(markdown)} chars of Markdown)")
        return self.converter(markdown)
