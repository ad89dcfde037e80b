"""
Result sinks.

Sinks serialize records with a fixed, declared column order. The whole
document is rendered in memory first and then swapped into place, so the
destination is either left untouched or fully replaced.
"""

import csv
import io
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from .constants import ERROR_MESSAGES, OutputFormat
from .errors import PersistenceError
from .models import Record

# Configure logger
logger = logging.getLogger(__name__)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class BaseSink(ABC):
    """Base class for sinks."""

    def __init__(self, columns: Sequence[str], headers: Optional[Dict[str, str]] = None):
        """
        Initialize the sink.

        Args:
            columns: Record fields to write, in order
            headers: Display label per column, defaults to the column name
        """
        self.columns = list(columns)
        self.headers = headers or {}

    @abstractmethod
    def render(self, records: Sequence[Record]) -> str:
        """Serialize records to a string."""

    def persist(self, records: Sequence[Record], destination: str):
        """
        Write records to ``destination``, replacing it atomically.

        Raises:
            PersistenceError: If the destination cannot be written
        """
        content = self.render(records)
        directory = os.path.dirname(os.path.abspath(destination))

        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=os.path.basename(destination))
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, destination)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error(f"Failed to write {destination}: {e}")
            raise PersistenceError(
                ERROR_MESSAGES["PERSISTENCE_ERROR"].format(path=destination), {"error": str(e)}
            ) from e

        logger.info(f"Saved {len(records)} records to {destination}")


class CsvSink(BaseSink):
    """Writes records as CSV with a header row."""

    def render(self, records: Sequence[Record]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow([self.headers.get(column, column) for column in self.columns])
        for record in records:
            writer.writerow(["" if value is None else value for value in record.to_dict(self.columns).values()])
        return buffer.getvalue()


class JsonSink(BaseSink):
    """Writes records as a JSON list of objects."""

    def render(self, records: Sequence[Record]) -> str:
        rows = [
            {self.headers.get(column, column): value for column, value in record.to_dict(self.columns).items()}
            for record in records
        ]
        return json.dumps(rows, ensure_ascii=False, indent=2)


def create_sink(
    output_format: OutputFormat,
    columns: Sequence[str],
    headers: Optional[Dict[str, str]] = None,
) -> BaseSink:
    """Return the sink for ``output_format``."""
    if OutputFormat(output_format) == OutputFormat.JSON:
        return JsonSink(columns, headers)
    return CsvSink(columns, headers)
