from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

class UploadResult(BaseModel):
    folder: str = Field(..., description="Cartella di destinazione")
    original_name: str = Field(..., description="Nome originale (solo visualizzazione)")
    saved_as: str = Field(..., description="Nome casuale con cui e' salvato")
    size: int = Field(..., description="Dimensione in byte")
    uploaded_by: Optional[str] = Field(None, description="sub del token")

class FolderList(BaseModel):
    folders: List[str] = Field(default_factory=list)

class FileItem(BaseModel):
    name: str
    extension: str
    updatedAt: int
    updatedAtIso: str
    fullPath: str = Field(..., description="Path logico /storage/uploads/<folder>/<name>")

class FileList(BaseModel):
    files: List[FileItem] = Field(default_factory=list)

class DeleteFilesRequest(BaseModel):
    folderName: str = Field("", description="Cartella")
    files: List[str] = Field(default_factory=list, description="Nomi salvati da eliminare")

class DeleteError(BaseModel):
    file: str
    reason: str

class DeleteFilesResult(BaseModel):
    deleted: List[str] = Field(default_factory=list)
    errors: List[DeleteError] = Field(default_factory=list)
