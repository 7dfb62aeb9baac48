"""Shared pytest fixtures: temporary data dir config and a fake OpenAI client."""

from __future__ import annotations

import itertools
from collections import defaultdict
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from cowriter.config import Config
from cowriter.services.conversation_store import ConversationStore
from cowriter.services.project_store import ProjectStore


def make_ai_response(
    response_id: str,
    *texts: str,
    refusal: Optional[str] = None,
    status: Optional[str] = "completed",
    error: Optional[Dict[str, Any]] = None,
    incomplete_details: Optional[Dict[str, Any]] = None,
    model: str = "gpt-test",
):
    content = [SimpleNamespace(type="output_text", text=t) for t in texts]
    if refusal is not None:
        content.append(SimpleNamespace(type="refusal", refusal=refusal))
    output = [
        SimpleNamespace(type="file_search_call", id="fs_1"),
        SimpleNamespace(type="message", content=content),
    ]
    return SimpleNamespace(
        id=response_id,
        created_at=1700000000.0,
        model=model,
        status=status,
        output=output,
        error=SimpleNamespace(**error) if error else None,
        incomplete_details=SimpleNamespace(**incomplete_details) if incomplete_details else None,
    )


class _Responses:
    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.queue: List[Any] = []
        self._ids = itertools.count(1)

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.queue:
            return self.queue.pop(0)
        return make_ai_response(f"resp_{next(self._ids)}", "generated text")


class _VectorStoreFiles:
    def __init__(self):
        self.attached: Dict[str, List[str]] = defaultdict(list)
        # file_id -> statuses reported by successive retrieve calls; last one repeats
        self.statuses: Dict[str, List[str]] = {}
        self.retrieve_calls: List[str] = []
        self.deleted: List[tuple] = []
        self.fail_on_attach: set = set()

    def create(self, vector_store_id: str, file_id: str):
        if file_id in self.fail_on_attach:
            raise RuntimeError(f"attach failed for {file_id}")
        self.attached[vector_store_id].append(file_id)
        return SimpleNamespace(id=file_id, vector_store_id=vector_store_id, status="in_progress")

    def retrieve(self, file_id: str, *, vector_store_id: str):
        self.retrieve_calls.append(file_id)
        script = self.statuses.get(file_id, ["completed"])
        status = script.pop(0) if len(script) > 1 else script[0]
        return SimpleNamespace(id=file_id, vector_store_id=vector_store_id, status=status)

    def list(self, vector_store_id: str, limit: int = 100):
        ids = self.attached.get(vector_store_id, [])[:limit]
        return SimpleNamespace(data=[SimpleNamespace(id=i, status="completed") for i in ids])

    def delete(self, file_id: str, *, vector_store_id: str):
        self.deleted.append((vector_store_id, file_id))
        self.attached[vector_store_id].remove(file_id)


class _VectorStores:
    def __init__(self):
        self.files = _VectorStoreFiles()
        self.stores: List[SimpleNamespace] = []
        self.deleted: List[str] = []
        self._ids = itertools.count(1)

    def create(self, name: str):
        store = SimpleNamespace(id=f"vs_{next(self._ids)}", name=name)
        self.stores.append(store)
        return store

    def list(self, limit: int = 20, order: str = "desc"):
        return SimpleNamespace(data=list(self.stores[:limit]))

    def delete(self, vector_store_id: str):
        self.deleted.append(vector_store_id)
        self.stores = [s for s in self.stores if s.id != vector_store_id]


class _Files:
    def __init__(self):
        self.uploaded: Dict[str, SimpleNamespace] = {}
        self.deleted: List[str] = []
        self._ids = itertools.count(1)

    def create(self, file, purpose: str):
        filename, stream = file
        data = stream.read()
        obj = SimpleNamespace(id=f"file_{next(self._ids)}", filename=filename, bytes=len(data), purpose=purpose)
        self.uploaded[obj.id] = obj
        return obj

    def retrieve(self, file_id: str):
        return self.uploaded[file_id]

    def delete(self, file_id: str):
        self.deleted.append(file_id)
        self.uploaded.pop(file_id, None)


class FakeOpenAI:
    def __init__(self):
        self.responses = _Responses()
        self.vector_stores = _VectorStores()
        self.files = _Files()


@pytest.fixture
def cfg(tmp_path):
    data_dir = tmp_path / "data"
    return type(
        "TestConfig",
        (Config,),
        {
            "COWRITER_ENV": "test",
            "DATA_DIR": str(data_dir),
            "DB_DIR": str(data_dir / "db"),
            "OPENAI_MODEL": "gpt-test",
            "VECTOR_STORE_POLL_INTERVAL": 2.5,
            "PANDOC_REFERENCE_DOC": "",
        },
    )


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def no_sleep(monkeypatch):
    """Record poll sleeps instead of waiting."""
    from cowriter.services import vectorstore_service

    sleeps: List[float] = []
    monkeypatch.setattr(vectorstore_service.time, "sleep", sleeps.append)
    return sleeps


@pytest.fixture
def projects(cfg):
    return ProjectStore(cfg)


@pytest.fixture
def conversations(cfg):
    return ConversationStore(cfg)
