from __future__ import annotations
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile

from uploadpanel.config import DEFAULT_FOLDER
from uploadpanel.errors import BadRequest, ValidationError
from uploadpanel.models.auth import TokenPayload
from uploadpanel.models.responses import Envelope, ok
from uploadpanel.models.upload import (
    DeleteFilesRequest, DeleteFilesResult, FileList, FolderList, UploadResult,
)
from uploadpanel.routers.deps import get_storage, require_auth
from uploadpanel.services.storage import Storage
from uploadpanel.utils.utils import validate_folder_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])

# ============================================================================
# Helpers
# ============================================================================
def _upload_size(upload: UploadFile) -> int:
    fp = upload.file
    fp.seek(0, 2)
    size = fp.tell()
    fp.seek(0)
    return size

# ============================================================================
# Endpoints (1 richiesta = 1 file)
# ============================================================================
@router.post("/run", response_model=Envelope[UploadResult])
def run(file: Optional[UploadFile] = File(None),
        folderName: str = Form(DEFAULT_FOLDER),
        user: TokenPayload = Depends(require_auth),
        storage: Storage = Depends(get_storage)):
    if file is None:
        raise BadRequest("No file uploaded")
    size = _upload_size(file)
    original_name = file.filename or ""
    # size prima del nome cartella: 413 ha precedenza su 422
    saved_as = storage.save_file(folderName, file.file, original_name, size)
    logger.info("upload by %s: %r -> %s/%s", user.sub, original_name, folderName, saved_as)
    return ok(UploadResult(folder=folderName, original_name=original_name, saved_as=saved_as,
                           size=size, uploaded_by=user.sub))

@router.get("/folderList", response_model=Envelope[FolderList])
def folder_list(user: TokenPayload = Depends(require_auth),
                storage: Storage = Depends(get_storage)):
    return ok(FolderList(folders=storage.list_folders()))

@router.get("/fileList", response_model=Envelope[FileList])
def file_list(folderName: str = Query("", description="Cartella"),
              user: TokenPayload = Depends(require_auth),
              storage: Storage = Depends(get_storage)):
    return ok(FileList(files=storage.list_files(folderName)))

@router.post("/deleteFiles", response_model=Envelope[DeleteFilesResult])
def delete_files(payload: Optional[DeleteFilesRequest] = Body(None),
                 user: TokenPayload = Depends(require_auth),
                 storage: Storage = Depends(get_storage)):
    payload = payload or DeleteFilesRequest()
    folder = validate_folder_name(payload.folderName)
    if not payload.files:
        raise ValidationError("No files specified")
    return ok(storage.delete_files(folder, payload.files))
