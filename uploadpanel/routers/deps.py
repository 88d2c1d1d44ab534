from __future__ import annotations
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from uploadpanel.config import Settings
from uploadpanel.errors import Forbidden, Unauthorized
from uploadpanel.models.auth import Role, TokenPayload
from uploadpanel.services.credentials import CredentialChecker
from uploadpanel.services.storage import Storage
from uploadpanel.services.tokens import TokenService

# auto_error=False: header mancante => stesso 401 generico
bearer_scheme = HTTPBearer(auto_error=False)

# ============================================================================
# Servizi costruiti in create_app() e appesi a app.state
# ============================================================================
def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens

def get_credentials(request: Request) -> CredentialChecker:
    return request.app.state.credentials

def get_storage(request: Request) -> Storage:
    return request.app.state.storage

# ============================================================================
# Autenticazione / ruoli
# ============================================================================
def require_auth(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
                 tokens: TokenService = Depends(get_tokens)) -> TokenPayload:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return tokens.verify(credentials.credentials)

def require_admin(user: TokenPayload = Depends(require_auth)) -> TokenPayload:
    if user.role is not Role.ADMIN:
        raise Forbidden("Forbidden (admin only)")
    return user

def require_user(user: TokenPayload = Depends(require_auth)) -> TokenPayload:
    if user.role is not Role.USER:
        raise Forbidden("Forbidden (user only)")
    return user
