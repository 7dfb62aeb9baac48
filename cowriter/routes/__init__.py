"""Route blueprints package for API endpoints.

One blueprint per route group: projects, sections, conversations, search
files and export. Handlers pull the shared ``Services`` bundle from the
current app and let domain errors propagate to the app's error handler.
"""

from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from flask import current_app, request
from pydantic import BaseModel

from cowriter.services import Services

M = TypeVar("M", bound=BaseModel)


def services() -> Services:
    return current_app.extensions["cowriter"]


def parse_body(model: Type[M]) -> M:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    return model.model_validate(payload)
