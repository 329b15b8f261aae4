from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class ViolationResponse(BaseModel):
    path: str
    kind: str
    rule: str
    message: str
    value: Optional[Any] = None

class ValidationResponse(BaseModel):
    app: Optional[str] = None
    valid: bool
    violations: List[ViolationResponse] = Field(default_factory=list)

class DecodeErrorResponse(BaseModel):
    detail: str
    errors: List[Dict[str, Any]] = Field(default_factory=list)

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
