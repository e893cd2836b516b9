"""Atomic publication of location snapshots to the guest-visible file."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from geoclue_bridge.exceptions import PersistError
from geoclue_bridge.models.snapshot import LocationSnapshot

_logger = logging.getLogger(__name__)


class LocationPublisher:
    """Writes snapshots to a fixed path, fully replacing prior content.

    The document is written to a temporary file in the same directory and
    renamed over the target, so a concurrent reader sees either the old or
    the new document, never a partial one. The parent directory must
    already exist.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def publish(self, snapshot: LocationSnapshot) -> None:
        """Serialize *snapshot* and atomically replace the published file.

        Raises
        ------
        PersistError
            Any filesystem error. The previous document stays in place.
        """
        data = snapshot.model_dump_json().encode("utf-8")
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "wb") as fp:
                fp.write(data)
                fp.flush()
                os.fsync(fp.fileno())
            # mkstemp creates 0600; the guest reads as another user.
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise PersistError(f"Cannot write {self._path}: {exc}", path=str(self._path)) from exc

        _logger.debug("Published %d bytes to %s", len(data), self._path)
