# storage/records.py
import copy
import json
import logging
import os
import tempfile
from pathlib import Path

from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


class RecordStore:
    """A named document holding a JSON array of records.

    Callers read the whole array, mutate it in memory and write the whole
    array back. There is no lock and no version token: two callers doing
    read-modify-write at the same time race, and the last ``save`` wins.
    """

    def load(self):
        raise NotImplementedError

    def save(self, records):
        raise NotImplementedError


class JsonFileStore(RecordStore):
    def __init__(self, path, default=None):
        self.path = Path(path)
        self.default = [] if default is None else default

    def _ensure_file(self):
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(self.default)
        logger.debug(f"Created record file {self.path}")

    def _write(self, records):
        # Write to a sibling temp file then rename so readers never see a torn document
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def load(self):
        self._ensure_file()
        with self.path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def save(self, records):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(records)

    def __repr__(self):
        return f"JsonFileStore({str(self.path)!r})"


class MemoryStore(RecordStore):
    """In-process store with the same whole-document contract."""

    def __init__(self, records=None):
        self._records = copy.deepcopy(records) if records is not None else []

    def load(self):
        return copy.deepcopy(self._records)

    def save(self, records):
        self._records = copy.deepcopy(records)


def get_store(name, default=None):
    """Return the file-backed store for ``name`` inside the configured data directory."""
    return JsonFileStore(Path(settings.MINDLYST_DATA_DIR) / name, default=default)


def now_ms():
    """Current time as epoch milliseconds, the timestamp format of every record."""
    return int(timezone.now().timestamp() * 1000)
