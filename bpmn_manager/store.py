"""Flat-file JSON store for process and process-instance snapshots.

One pretty-printed JSON file per entity:

    <data_dir>/process_<id>.json
    <data_dir>/instance_<id>.json

The dashboard does not use this store; it is available to integrators who
want to export or cache snapshots. There is no locking: concurrent writers to
the same id race and the last rename wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

from bpmn_sdk.models import Process, ProcessInstance

logger = logging.getLogger(__name__)

PROCESS_PREFIX = "process_"
INSTANCE_PREFIX = "instance_"
SUFFIX = ".json"

T = TypeVar("T")


class StoreError(Exception):
    """Raised when a stored snapshot cannot be read or written."""


class NotFoundError(StoreError):
    """Raised when no snapshot exists for the requested id."""


class LocalStore:
    """File-backed persistence for Process and ProcessInstance snapshots."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, prefix: str, entity_id: str) -> Path:
        return self.data_dir / f"{prefix}{entity_id}{SUFFIX}"

    def _write(self, path: Path, data: dict[str, Any]) -> None:
        # Write to temp file in same directory so the rename is atomic
        fd, temp_path = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{path.stem}_", suffix=SUFFIX
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def _read(self, path: Path, decoder: Callable[[Any], T]) -> T:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise NotFoundError(f"No snapshot at {path}") from e
        except (OSError, ValueError) as e:
            raise StoreError(f"Cannot read snapshot {path}: {e}") from e
        try:
            return decoder(data)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Invalid snapshot {path}: {e}") from e

    def _list(self, prefix: str, decoder: Callable[[Any], T]) -> list[T]:
        items: list[T] = []
        for path in sorted(self.data_dir.glob(f"{prefix}*{SUFFIX}")):
            try:
                items.append(self._read(path, decoder))
            except StoreError as e:
                logger.warning("Skipping unreadable snapshot: %s", e)
        return items

    # -- processes ---------------------------------------------------------

    def save_process(self, process: Process) -> Path:
        """Write a process snapshot, replacing any previous one."""
        path = self._path(PROCESS_PREFIX, process.id)
        self._write(path, process.to_dict())
        return path

    def load_process(self, process_id: str) -> Process:
        """Load a process snapshot.

        Raises:
            NotFoundError: If no snapshot exists for process_id.
            StoreError: If the file exists but cannot be decoded.
        """
        return self._read(self._path(PROCESS_PREFIX, process_id), Process.from_dict)

    def list_processes(self) -> list[Process]:
        """All readable process snapshots; corrupt files are skipped."""
        return self._list(PROCESS_PREFIX, Process.from_dict)

    # -- instances ---------------------------------------------------------

    def save_instance(self, instance: ProcessInstance) -> Path:
        """Write a process-instance snapshot, replacing any previous one."""
        path = self._path(INSTANCE_PREFIX, instance.id)
        self._write(path, instance.to_dict())
        return path

    def load_instance(self, instance_id: str) -> ProcessInstance:
        """Load a process-instance snapshot.

        Raises:
            NotFoundError: If no snapshot exists for instance_id.
            StoreError: If the file exists but cannot be decoded.
        """
        return self._read(
            self._path(INSTANCE_PREFIX, instance_id), ProcessInstance.from_dict
        )

    def list_instances(self) -> list[ProcessInstance]:
        """All readable instance snapshots; corrupt files are skipped."""
        return self._list(INSTANCE_PREFIX, ProcessInstance.from_dict)
