from __future__ import annotations
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")

class Envelope(BaseModel, Generic[T]):
    success: bool = Field(True)
    data: Optional[T] = None

def ok(data: Any = None) -> dict:
    return {"success": True, "data": data}

def fail(message: str, code: Optional[str] = None) -> dict:
    body: dict = {"success": False, "message": message}
    if code:
        body["code"] = code
    return body
