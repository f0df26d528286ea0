"""
Record Store.

Keeps the whole job collection in a single JSON document (an array of
records, newest first). Every write replaces the document atomically.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from remotetrail.core.errors import JobNotFoundError, RecordStoreError

logger = logging.getLogger(__name__)

JobDict = Dict[str, Any]


class RecordStore:
    """Load/save the full list of job records from one JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[JobDict]:
        """
        Read every record in document order.

        A missing document is an empty collection, not an error.

        Raises:
            RecordStoreError: If the file can't be read or isn't a JSON array
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"Failed to read jobs document {self.path}: {e}")
            raise RecordStoreError(f"Failed to read {self.path}") from e

        if not raw.strip():
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Jobs document {self.path} is not valid JSON: {e}")
            raise RecordStoreError(f"Malformed jobs document {self.path}") from e

        if not isinstance(records, list):
            raise RecordStoreError(f"Jobs document {self.path} must hold a JSON array")

        return records

    def save(self, records: List[JobDict]) -> None:
        """
        Overwrite the document with the full collection.

        Writes a sibling temp file and renames it over the document, so readers
        never see a half-written file.

        Raises:
            RecordStoreError: If the write can't complete (disk full, permissions)
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write jobs document {self.path}: {e}")
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise RecordStoreError(f"Failed to write {self.path}") from e

        logger.debug(f"Saved {len(records)} jobs to {self.path}")

    def find(self, job_id: str) -> Optional[JobDict]:
        for record in self.load():
            if record.get("id") == job_id:
                return record
        return None

    def prepend(self, record: JobDict) -> None:
        """Insert a new record at the front (newest first)."""
        records = self.load()
        self.save([record] + records)

    def replace(self, record: JobDict) -> None:
        """Swap in a record with the same id, keeping its position."""
        records = self.load()
        index = _index_of(records, record["id"])
        records[index] = record
        self.save(records)

    def remove(self, job_id: str) -> JobDict:
        """Drop a record by id and return it."""
        records = self.load()
        index = _index_of(records, job_id)
        removed = records.pop(index)
        self.save(records)
        return removed


def _index_of(records: List[JobDict], job_id: str) -> int:
    for index, record in enumerate(records):
        if record.get("id") == job_id:
            return index
    raise JobNotFoundError(job_id)
