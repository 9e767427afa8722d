"""
Rephrase Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Strict input validation, automatic serialization, and OpenAPI docs.
How:   FastAPI validates request bodies against the input models and
       serializes the envelopes returned by the services.

Wire format:
    JSON keys are camelCase (`originalText`, `isFavorite`, `createdAt`).
    Python attributes stay snake_case; `to_camel` aliases bridge the two and
    `populate_by_name` lets Python code construct models with either name.

Partial updates:
    For the update models "supplied" means "present in the request body",
    which pydantic tracks in `model_fields_set`. Optional labels may be sent
    as null to clear them; required columns (originalText, content,
    isFavorite) reject null.

Creates:
    Every field may be omitted, but none may be sent as null: null is a
    wrong type for a string or boolean, not a way to say "absent".
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to and accepting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(CamelModel):
    """Base for update inputs where every mutable field is optional."""

    def supplied_fields(self) -> Dict[str, Any]:
        """Field name → value for every field present in the input."""
        return {name: getattr(self, name) for name in sorted(self.model_fields_set)}


# ══════════════════════════════════════════════════════════════════════════
# Caller Identity
# ══════════════════════════════════════════════════════════════════════════


class CurrentUser(BaseModel):
    """Authenticated caller, attached to the request by AuthContextMiddleware."""

    id: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Input Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


def _not_null(value: Any, info: ValidationInfo) -> Any:
    if value is None:
        raise ValueError(f"{to_camel(info.field_name)} cannot be null")
    return value


class SessionCreate(CamelModel):
    """Optional labels may be omitted but not sent as null."""

    language: Optional[str] = Field(default=None, description="Target language label")
    context: Optional[str] = Field(
        default=None, description='Usage context label, e.g. "academic", "casual"'
    )
    original_text: str = Field(min_length=1, description="Source text to rephrase")

    @field_validator("language", "context")
    @classmethod
    def labels_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return _not_null(v, info)


class SessionUpdate(PartialUpdate):
    language: Optional[str] = None
    context: Optional[str] = None
    original_text: Optional[str] = Field(default=None, min_length=1)

    @field_validator("original_text")
    @classmethod
    def original_text_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return _not_null(v, info)


class VariantCreate(CamelModel):
    tone: Optional[str] = Field(default=None, description='e.g. "formal", "friendly"')
    complexity: Optional[str] = Field(default=None, description='e.g. "basic", "advanced"')
    variant_label: Optional[str] = Field(default=None, description='e.g. "A", "Short version"')
    content: str = Field(min_length=1, description="Paraphrased text")
    is_favorite: bool = Field(default=False, description="Defaults to false")

    @field_validator("tone", "complexity", "variant_label")
    @classmethod
    def labels_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return _not_null(v, info)


class VariantUpdate(PartialUpdate):
    tone: Optional[str] = None
    complexity: Optional[str] = None
    variant_label: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    is_favorite: Optional[bool] = None

    @field_validator("content", "is_favorite")
    @classmethod
    def required_columns_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        return _not_null(v, info)


# ══════════════════════════════════════════════════════════════════════════
# Records: persisted rows as returned to clients
# ══════════════════════════════════════════════════════════════════════════


class SessionRecord(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    language: Optional[str] = None
    context: Optional[str] = None
    original_text: str
    created_at: datetime
    updated_at: datetime


class VariantRecord(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    session_id: str
    tone: Optional[str] = None
    complexity: Optional[str] = None
    variant_label: Optional[str] = None
    content: str
    is_favorite: bool
    created_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Envelopes: uniform {success, data} responses
# ══════════════════════════════════════════════════════════════════════════


class SessionData(CamelModel):
    session: SessionRecord


class SessionEnvelope(CamelModel):
    success: bool = True
    data: SessionData


class SessionListData(CamelModel):
    items: List[SessionRecord]
    total: int


class SessionListEnvelope(CamelModel):
    success: bool = True
    data: SessionListData


class VariantData(CamelModel):
    variant: VariantRecord


class VariantEnvelope(CamelModel):
    success: bool = True
    data: VariantData


class VariantListData(CamelModel):
    items: List[VariantRecord]
    total: int


class VariantListEnvelope(CamelModel):
    success: bool = True
    data: VariantListData


class AckEnvelope(CamelModel):
    """Bare acknowledgment, returned by deletions."""

    success: bool = True


# ══════════════════════════════════════════════════════════════════════════
# Error and Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorDetail(CamelModel):
    code: str = Field(description="Machine-readable error code, e.g. NOT_FOUND")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")


class ErrorResponse(CamelModel):
    """
    Error envelope for every failure.

    Example:
        {
            "success": false,
            "error": {"code": "NOT_FOUND", "message": "Rephrase session not found."},
            "requestId": "a1b2c3d4"
        }
    """

    success: bool = False
    error: ErrorDetail
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
