from __future__ import annotations
import logging
import os
import secrets
import stat
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List, Sequence
from zoneinfo import ZoneInfo

from uploadpanel.config import MAX_UPLOAD_SIZE, PUBLIC_UPLOADS_PREFIX
from uploadpanel.errors import MoveFailed, NotFound, TooLarge
from uploadpanel.models.upload import DeleteError, DeleteFilesResult, FileItem
from uploadpanel.utils.utils import (
    atomic_write_stream, ensure_dir, extension_of, folder_path,
    is_temp_upload, is_valid_file_name, is_valid_folder_name, is_within, require_base_dir,
)

logger = logging.getLogger(__name__)


def stored_name_for(original_name: str) -> str:
    """16 byte casuali in hex (+ estensione minuscola dell'originale)."""
    name = secrets.token_hex(16)
    ext = extension_of(original_name)
    return f"{name}.{ext.lower()}" if ext else name


class Storage:
    """Operazioni su <base>/<folder>/<file>; nessuno stato oltre al filesystem."""

    def __init__(self, base_dir: Path, timezone: str = "UTC", max_size: int = MAX_UPLOAD_SIZE):
        self.base_dir = Path(base_dir)
        self.tz = ZoneInfo(timezone)
        self.max_size = max_size

    # ------------------------------------------------------------------ folders
    def create_folder_if_absent(self, folder_name: str) -> Path:
        target = folder_path(self.base_dir, folder_name)
        if not target.is_dir():
            ensure_dir(target)
            logger.info("created folder %s", folder_name)
        return target

    def list_folders(self) -> List[str]:
        base = require_base_dir(self.base_dir)
        # solo cartelle raggiungibili da fileList/deleteFiles (niente .trash, .git, ...)
        return sorted(p.name for p in base.iterdir() if p.is_dir() and is_valid_folder_name(p.name))

    # -------------------------------------------------------------------- files
    def save_file(self, folder_name: str, source: BinaryIO, original_name: str, size: int) -> str:
        if size > self.max_size:
            raise TooLarge()
        target_dir = self.create_folder_if_absent(folder_name)
        saved_as = stored_name_for(original_name)
        dest = target_dir / saved_as
        atomic_write_stream(dest, source, lambda e: MoveFailed())
        logger.info("stored %s/%s (%d bytes)", folder_name, saved_as, size)
        return saved_as

    def list_files(self, folder_name: str) -> List[FileItem]:
        target_dir = folder_path(self.base_dir, folder_name)
        if not target_dir.is_dir():
            return []
        items: List[FileItem] = []
        for entry in target_dir.iterdir():
            if is_temp_upload(entry.name):
                continue
            try:
                st = entry.stat()
            except FileNotFoundError:
                # eliminato (o rinominato) tra iterdir e stat
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            mtime = int(st.st_mtime)
            items.append(FileItem(
                name=entry.name,
                extension=extension_of(entry.name),
                updatedAt=mtime,
                updatedAtIso=datetime.fromtimestamp(mtime, self.tz).isoformat(),
                fullPath=f"{PUBLIC_UPLOADS_PREFIX}/{folder_name}/{entry.name}",
            ))
        # piu' recenti prima; a parita' di mtime ordine per nome
        items.sort(key=lambda f: f.name)
        items.sort(key=lambda f: f.updatedAt, reverse=True)
        return items

    def delete_files(self, folder_name: str, names: Sequence[str]) -> DeleteFilesResult:
        target_dir = folder_path(self.base_dir, folder_name)
        if not target_dir.is_dir():
            raise NotFound("Target folder not found")

        result = DeleteFilesResult()
        for name in names:
            if not is_valid_file_name(name) or not is_within(target_dir, target_dir / name):
                result.errors.append(DeleteError(file=str(name), reason="Invalid file name"))
                continue
            path = target_dir / name
            if is_temp_upload(name) or not path.is_file():
                result.errors.append(DeleteError(file=name, reason="File not found"))
                continue
            try:
                os.unlink(path)
            except FileNotFoundError:
                # eliminato da una richiesta concorrente
                result.errors.append(DeleteError(file=name, reason="File not found"))
                continue
            except OSError as e:
                logger.warning("delete failed for %s/%s: %s", folder_name, name, e)
                result.errors.append(DeleteError(file=name, reason="Delete failed"))
                continue
            result.deleted.append(name)
        if result.deleted:
            logger.info("deleted %d file(s) from %s", len(result.deleted), folder_name)
        return result
