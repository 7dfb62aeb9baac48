"""VectorStoreService: OpenAI vector stores and file ingestion.

Uploads raw files, attaches them to a vector store and, when asked, blocks
until the vector store reports the file as ``completed``. Files uploaded to
a vector store are not searchable before that point. Batches of files are
ingested concurrently and joined before returning.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from openai import OpenAI

from cowriter.config import Config

COMPLETED = "completed"


class VectorStoreService:
    def __init__(self, client: OpenAI, cfg: Config = Config):
        self.client = client
        self.cfg = cfg
        self.poll_interval = cfg.VECTOR_STORE_POLL_INTERVAL

    # -------- Vector stores --------

    def create_vector_store(self, name: str) -> str:
        vector_store = self.client.vector_stores.create(name=name)
        logging.info(f"Created vector store {vector_store.id} ({name})")
        return vector_store.id

    def delete_vector_store(self, vector_store_id: str) -> None:
        self.client.vector_stores.delete(vector_store_id)

    def find_or_create_vector_store(self, name: str) -> str:
        """Return the id of the vector store called ``name``, creating it if absent.

        Only the 10 oldest vector stores are scanned.
        """
        page = self.client.vector_stores.list(limit=10, order="asc")
        for vector_store in page.data:
            if vector_store.name == name:
                return vector_store.id
        return self.create_vector_store(name)

    # -------- Files --------

    def upload_file(self, file: Any) -> Any:
        """Upload a raw file; ``file`` is a stream or a ``(filename, stream)`` tuple."""
        return self.client.files.create(file=file, purpose="assistants")

    def attach_file_to_vector_store(self, vector_store_id: str, file_id: str, wait_for_completion: bool = True) -> None:
        self.client.vector_stores.files.create(vector_store_id=vector_store_id, file_id=file_id)
        if wait_for_completion:
            self._poll_until_completed(vector_store_id, file_id)

    def _poll_until_completed(self, vector_store_id: str, file_id: str) -> None:
        # First check is immediate; no attempt cap
        while True:
            vs_file = self.client.vector_stores.files.retrieve(file_id, vector_store_id=vector_store_id)
            logging.debug(f"Vector store {vector_store_id} file {file_id}: {vs_file.status}")
            if vs_file.status == COMPLETED:
                return
            time.sleep(self.poll_interval)

    def list_files_in_vector_store(self, vector_store_id: str, limit: Optional[int] = None) -> List[Any]:
        page = self.client.vector_stores.files.list(vector_store_id, limit=limit or self.cfg.VECTOR_STORE_FILES_LIMIT)
        return list(page.data)

    def get_file_info(self, file_id: str) -> Any:
        return self.client.files.retrieve(file_id)

    def remove_file_from_vector(self, file_id: str, vector_store_id: str) -> None:
        self.client.vector_stores.files.delete(file_id, vector_store_id=vector_store_id)

    def delete_file(self, file_id: str) -> None:
        self.client.files.delete(file_id)

    # -------- Batches --------

    def _ingest_one(self, vector_store_id: str, filename: str, stream: BinaryIO) -> Dict[str, str]:
        file_object = self.upload_file((filename, stream))
        self.attach_file_to_vector_store(vector_store_id, file_object.id, True)
        return {"id": file_object.id, "filename": file_object.filename}

    def upload_files(self, vector_store_id: str, files: List[Tuple[str, BinaryIO]]) -> List[Dict[str, str]]:
        """Upload, attach and wait for every file concurrently.

        Returns once all branches have finished; the first failure is
        re-raised and the batch yields no partial result.
        """
        if not files:
            return []
        logging.info(f"Ingesting {len(files)} files into vector store {vector_store_id}")
        with ThreadPoolExecutor(max_workers=len(files)) as ex:
            futures = [ex.submit(self._ingest_one, vector_store_id, name, stream) for name, stream in files]
        results = [f.result() for f in futures]
        logging.info(f"Ingested {len(results)} files into vector store {vector_store_id}")
        return results

    def describe_files(self, vector_store_id: str) -> List[Dict[str, str]]:
        out = []
        for vs_file in self.list_files_in_vector_store(vector_store_id):
            info = self.get_file_info(vs_file.id)
            out.append({"id": info.id, "filename": info.filename, "size": f"{info.bytes} Bytes"})
        return out
