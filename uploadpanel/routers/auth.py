from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Body, Depends

from uploadpanel.models.auth import LoginRequest, Role, TokenPayload, TokenResponse
from uploadpanel.models.responses import Envelope, ok
from uploadpanel.routers.deps import get_credentials, get_tokens, require_auth
from uploadpanel.services.credentials import CredentialChecker
from uploadpanel.services.tokens import TokenService

router = APIRouter(prefix="/api/auth", tags=["Auth"])

@router.post("/login", response_model=Envelope[TokenResponse])
def login(payload: Optional[LoginRequest] = Body(None),
          credentials: CredentialChecker = Depends(get_credentials),
          tokens: TokenService = Depends(get_tokens)):
    payload = payload or LoginRequest()
    subject = credentials.authenticate(payload.username, payload.password)
    return ok(TokenResponse(token=tokens.issue(subject, Role.ADMIN)))

@router.get("/me", response_model=Envelope[TokenPayload])
def me(user: TokenPayload = Depends(require_auth)):
    return ok(user)
