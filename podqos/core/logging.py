"""JSONL logging for report runs."""

import json
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


def get_log_path(name: str, base_path: Path) -> Path:
    """
    Get the log file path for a run.

    Args:
        name: Program name used as the file stem
        base_path: Base directory for logs

    Returns:
        Path to the log file: {base}/{date}/{name}.jsonl
    """
    today = date.today().isoformat()
    return base_path / today / f"{name}.jsonl"


class RunLogger:
    """
    JSONL logger for a single run.

    Every entry carries the program name and a run id, so runs sharing a
    daily file can be told apart. Fields passed to bind() are repeated on
    all later entries. With no log_path the logger accepts calls and writes
    nothing.
    """

    def __init__(self, name: str, log_path: Path | None = None):
        self.name = name
        self.log_path = log_path
        self.run_id = uuid.uuid4().hex[:12]
        self.fields: dict[str, Any] = {}
        self._file = None

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def bind(self, **fields: Any) -> None:
        """Attach fields to every following entry."""
        self.fields.update(fields)

    def _write(self, level: str, message: str, extra: dict[str, Any]) -> None:
        if not self.enabled:
            return
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "program": self.name,
            "run_id": self.run_id,
            "message": message,
            **self.fields,
            **extra,
        }
        self._file.write(json.dumps(entry, default=str) + "\n")
        self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        self._write("debug", message, extra)

    def info(self, message: str, **extra: Any) -> None:
        self._write("info", message, extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._write("warning", message, extra)

    def error(self, message: str, **extra: Any) -> None:
        self._write("error", message, extra)

    def exception(self, message: str, exc: BaseException, **extra: Any) -> None:
        """Log an error entry describing exc."""
        self._write("error", message, {"error_type": type(exc).__name__, "error": str(exc), **extra})

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Unexpected errors escaping the run still leave a trace
        if exc_val is not None and not isinstance(exc_val, (SystemExit, KeyboardInterrupt)):
            self.exception("run aborted", exc_val)
        self.close()
