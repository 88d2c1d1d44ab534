from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field

class Role(str, Enum):
    # login emette sempre ADMIN; USER esiste solo per require_user
    ADMIN = "admin"
    USER = "user"

class LoginRequest(BaseModel):
    username: str = Field("", description="Username amministratore")
    password: str = Field("", description="Password amministratore")

class TokenResponse(BaseModel):
    token: str = Field(..., description="JWT firmato HS256")

class TokenPayload(BaseModel):
    sub: str = Field(..., description="Soggetto (username)")
    role: Role = Field(..., description="Ruolo")
    iat: int = Field(..., description="Emesso (unix seconds)")
    exp: int = Field(..., description="Scadenza (unix seconds)")
