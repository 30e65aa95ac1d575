# src/mstodo_exporter/core/archive.py

from __future__ import annotations

import logging
import os
import zipfile
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def archive_path_for(directory: str | Path, base_name: str, now: datetime | None = None) -> Path:
    """<parent of directory>/<base_name>_<yyyy-MM-dd_HH-mm-ss>.zip, local time."""
    now = datetime.now() if now is None else now
    parent = Path(directory).resolve().parent
    return parent / f"{base_name}_{now.strftime(TIMESTAMP_FORMAT)}.zip"


def archive_directory(directory: str | Path, base_name: str, *, now: datetime | None = None) -> Path:
    """
    Zip the whole tree under `directory` next to it and return the archive path.

    Entries are relative to `directory` itself (the directory is not a top-level entry).
    An existing archive at the same path is replaced.
    """
    src = Path(directory)
    zip_path = archive_path_for(src, base_name, now)
    if zip_path.exists():
        zip_path.unlink()

    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for root, dirs, files in os.walk(src):
            root_path = Path(root)
            if root_path != src and not dirs and not files:
                # keep empty directories
                zf.write(root_path, arcname=root_path.relative_to(src).as_posix() + "/")
            for name in sorted(files):
                full = root_path / name
                zf.write(full, arcname=full.relative_to(src).as_posix())

    logger.info("Directory '%s' archived to '%s'", src, zip_path)
    return zip_path
