from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable
import re
import shutil

from uploadpanel.config import FOLDER_NAME_PATTERN
from uploadpanel.errors import ValidationError, StorageError, DirectoryCreateFailed

# ============================================================================
# Validazione nomi
# ============================================================================
_FOLDER_NAME = re.compile(FOLDER_NAME_PATTERN)
_PATH_SEPARATORS = ("/", "\\")

# file temporanei degli upload in corso: .<random>.part
TMP_PREFIX = "."
TMP_SUFFIX = ".part"

def is_valid_folder_name(raw: object) -> bool:
    """Unica regola per le cartelle: [A-Za-z0-9_-], 1..50 caratteri."""
    return isinstance(raw, str) and _FOLDER_NAME.fullmatch(raw) is not None

def validate_folder_name(raw: object) -> str:
    if not is_valid_folder_name(raw):
        raise ValidationError("Invalid folder name")
    return raw

def is_valid_file_name(raw: object) -> bool:
    # i nomi salvati sono token+estensione: basta vietare separatori e . / ..
    if not isinstance(raw, str) or raw in ("", ".", ".."):
        return False
    return not any(sep in raw for sep in _PATH_SEPARATORS) and "\x00" not in raw

def extension_of(name: str) -> str:
    """Testo dopo l'ultimo punto del basename ('' se assente)."""
    base = re.split(r"[\\/]", name)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[1]

# ============================================================================
# FS helpers
# ============================================================================
def require_base_dir(base: Path) -> Path:
    if not base.is_dir():
        raise StorageError("Upload base directory not found")
    return base

def ensure_dir(p: Path) -> Path:
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateFailed() from e
    return p

def is_within(base: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(base.resolve())
    except ValueError:
        return False
    return True

def is_temp_upload(name: str) -> bool:
    return name.startswith(TMP_PREFIX) and name.endswith(TMP_SUFFIX)

def folder_path(base: Path, folder_name: str) -> Path:
    # prima il nome (422), poi la radice (500)
    name = validate_folder_name(folder_name)
    p = require_base_dir(base) / name
    if not is_within(base, p):
        raise ValidationError("Invalid folder name")
    return p

def atomic_write_stream(path: Path, source: BinaryIO, on_error: Callable[[BaseException], Exception]) -> None:
    """
    Scrittura atomica di uno stream binario:
    - tmp nella STESSA directory del file finale
    - sostituzione atomica con os.replace
    - in caso di errore il tmp viene rimosso e si solleva on_error(e)
    """
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=TMP_PREFIX, suffix=TMP_SUFFIX)
    try:
        with os.fdopen(fd, "wb") as fp:
            shutil.copyfileobj(source, fp)
        os.replace(tmp_path, path)
    except Exception as e:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise on_error(e) from e
