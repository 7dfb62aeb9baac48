"""Flask app factory and blueprint registration.

Defines `create_app()` to validate configuration, build the service bundle
(stores, OpenAI orchestration, ingestion, export), enable CORS, register
route blueprints and map domain errors to HTTP responses.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from openai import OpenAI
from pydantic import ValidationError

from cowriter.config import Config, ensure_data_dirs, validate_config
from cowriter.errors import CowriterError, status_for
from cowriter.routes.conversations import conversations_bp
from cowriter.routes.export import export_bp
from cowriter.routes.files import files_bp
from cowriter.routes.projects import projects_bp
from cowriter.routes.sections import sections_bp
from cowriter.services import Services
from cowriter.services.conversation_store import ConversationStore
from cowriter.services.export_service import ProjectExporter
from cowriter.services.llm_service import LLMService, build_ai_context
from cowriter.services.project_store import ProjectStore
from cowriter.services.vectorstore_service import VectorStoreService


def build_services(
    cfg: Config = Config,
    openai_client: Optional[OpenAI] = None,
    exporter: Optional[ProjectExporter] = None,
) -> Services:
    client = openai_client or OpenAI()
    projects = ProjectStore(cfg)
    conversations = ConversationStore(cfg)
    vector_stores = VectorStoreService(client, cfg)
    # Resolved once for the process lifetime
    ai_context = build_ai_context(vector_stores, cfg.SHARED_VECTOR_STORE_NAME)
    return Services(
        projects=projects,
        conversations=conversations,
        vector_stores=vector_stores,
        llm=LLMService(client, projects, conversations, ai_context),
        exporter=exporter or ProjectExporter(cfg),
        ai_context=ai_context,
    )


def create_app(
    cfg: Config = Config,
    openai_client: Optional[OpenAI] = None,
    exporter: Optional[ProjectExporter] = None,
) -> Flask:
    validate_config(cfg)
    logging.basicConfig(level=cfg.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = Flask(__name__)
    app.config.from_object(cfg)
    app.config["MAX_CONTENT_LENGTH"] = cfg.MAX_UPLOAD_MB * 1024 * 1024
    ensure_data_dirs(cfg)
    app.extensions["cowriter"] = build_services(cfg, openai_client, exporter)

    # Allow all origins for local development, including preflight for file upload
    CORS(
        app,
        resources={r"/*": {"origins": "*"}},
        supports_credentials=False,
        expose_headers=["Content-Disposition"],
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    )

    # Blueprints
    app.register_blueprint(projects_bp)
    app.register_blueprint(sections_bp)
    app.register_blueprint(conversations_bp)
    app.register_blueprint(files_bp)
    app.register_blueprint(export_bp)

    @app.errorhandler(CowriterError)
    def handle_domain_error(err: CowriterError):
        status = status_for(err)
        if status >= 500:
            logging.exception(f"Request failed: {err}")
        else:
            logging.warning(f"Request failed ({status}): {err}")
        return jsonify({"error": str(err), "kind": err.kind.value}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return jsonify({"error": "Invalid request body.", "details": err.errors(include_url=False, include_context=False)}), 400

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
