"""Tests for configuration validation and the error kind → status table."""

from __future__ import annotations

import pytest

from cowriter import create_app
from cowriter.config import ensure_data_dirs, env_number, validate_config
from cowriter.errors import (
    ERROR_STATUS,
    AIResponseError,
    ConversationNotFound,
    ErrorKind,
    InvalidInput,
    ProjectNotFound,
    SectionNotFound,
    SectionUncompleted,
    status_for,
)


def test_valid_config_passes(cfg):
    validate_config(cfg)
    ensure_data_dirs(cfg)


@pytest.mark.parametrize(
    "attr,value",
    [
        ("COWRITER_ENV", "staging"),
        ("OPENAI_MODEL", "  "),
        ("SHARED_VECTOR_STORE_NAME", ""),
        ("VECTOR_STORE_POLL_INTERVAL", 0),
    ],
)
def test_malformed_config_fails_fast(cfg, attr, value):
    setattr(cfg, attr, value)
    with pytest.raises(InvalidInput):
        validate_config(cfg)


def test_create_app_rejects_bad_config_before_calling_openai(cfg, fake_openai):
    cfg.COWRITER_ENV = "nope"
    with pytest.raises(InvalidInput):
        create_app(cfg, openai_client=fake_openai)
    assert fake_openai.vector_stores.stores == []


@pytest.mark.parametrize(
    "error,status",
    [
        (ProjectNotFound("p"), 404),
        (SectionNotFound("p", "s"), 404),
        (ConversationNotFound("c"), 404),
        (ConversationNotFound(project_id="p"), 404),
        (SectionUncompleted("p", "s"), 409),
        (AIResponseError("r", {"code": "x", "message": "y"}, "failed"), 500),
        (InvalidInput("a", "b"), 400),
    ],
)
def test_status_for(error, status):
    assert status_for(error) == status


def test_every_kind_has_a_status():
    assert set(ERROR_STATUS) == set(ErrorKind)


def test_ai_response_error_message():
    err = AIResponseError("resp_1", {"code": "rate_limit", "message": "slow down"}, "failed", {"reason": "content_filter"})
    text = str(err)
    assert "resp_1" in text
    assert "rate_limit" in text
    assert "Incomplete details: content_filter" in text


@pytest.mark.parametrize(
    "raw,cast",
    [("abc", float), ("2.5", int), ("", int)],
)
def test_unparseable_numeric_env_is_invalid_input(monkeypatch, raw, cast):
    monkeypatch.setenv("VECTOR_STORE_POLL_INTERVAL", raw)
    with pytest.raises(InvalidInput) as exc:
        env_number("VECTOR_STORE_POLL_INTERVAL", "2.5", cast)
    assert exc.value.kind is ErrorKind.INVALID_INPUT


def test_numeric_env_default_and_override(monkeypatch):
    monkeypatch.delenv("MAX_UPLOAD_MB", raising=False)
    assert env_number("MAX_UPLOAD_MB", "50", int) == 50
    monkeypatch.setenv("MAX_UPLOAD_MB", "7")
    assert env_number("MAX_UPLOAD_MB", "50", int) == 7
