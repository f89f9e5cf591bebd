"""
Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional


# Request Schemas
class LocalizedBlock(BaseModel):
    """Reference citation plus body text for one language of a section."""

    reference: str = ""
    text: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("reference", "text", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class LiturgySection(BaseModel):
    """A named section with parallel Latin and Slovenian content."""

    name: str = ""
    latin: LocalizedBlock = Field(default_factory=LocalizedBlock)
    slovenian: LocalizedBlock = Field(default_factory=LocalizedBlock)

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("latin", "slovenian", mode="before")
    @classmethod
    def none_to_empty_block(cls, value: Any) -> Any:
        return {} if value is None else value


class LiturgyRequest(BaseModel):
    """Body of POST /api/generate."""

    title: str = ""
    subtitle: str
    filename: Optional[str] = None
    sections: List[LiturgySection]

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


# Error Schemas
class InvalidRequestResponse(BaseModel):
    """Schema for 400 responses."""

    error: str = "Invalid request"
    required: List[str]
    details: Optional[List[str]] = None


class MethodNotAllowedResponse(BaseModel):
    """Schema for 405 responses."""

    error: str = "Method not allowed. Use POST."


class GenerationFailedResponse(BaseModel):
    """Schema for 500 responses from the generator."""

    error: str = "Failed to generate document"
    message: str


# Health
class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    service: str
    version: str
    timestamp: str
