"""
Generation models for the UI Prototyper: requests, results and stored previews.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class GenerationRequest(BaseModel):
    prompt: str = Field(..., description="Natural-language description of the UI to generate")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class GenerationResult(BaseModel):
    """
    Outcome of one generation, successful or fallback.
    """
    model_config = ConfigDict(frozen=True)

    source_text: str
    preview_id: str
    label: Optional[str] = None


class PreviewRecord(BaseModel):
    """
    A generation persisted in the preview store. Never mutated after creation.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    prompt: str
    source_text: str
    created_at: datetime


class DiagnosticResult(BaseModel):
    success: bool
    message: str
    response: Optional[str] = None
    error: Optional[str] = None
