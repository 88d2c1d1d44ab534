from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from uploadpanel.errors import BadRequest
from uploadpanel.models.auth import TokenPayload
from uploadpanel.models.responses import ok
from uploadpanel.routers.deps import require_auth

# Verifiche manuali del flusso JWT dalla SPA: niente viene salvato su disco
router = APIRouter(prefix="/api/test", tags=["Diagnostics"])

@router.get("/message")
def message():
    return ok("pong")

@router.get("/auth", response_model=Dict[str, Any])
def auth(user: TokenPayload = Depends(require_auth)):
    return ok({"message": "JWT OK", "user": user.model_dump(mode="json")})

@router.post("/upload", response_model=Dict[str, Any])
async def upload(request: Request, user: TokenPayload = Depends(require_auth)):
    form = await request.form()
    parts = [v for v in form.values() if isinstance(v, UploadFile)]
    if not parts:
        raise BadRequest("No file uploaded")
    first = parts[0]
    data = await first.read()
    return ok({
        "message": "Upload received (dummy)",
        "filename": first.filename,
        "size": len(data),
        "type": first.content_type,
        "user": user.model_dump(mode="json"),
    })
