"""Pydantic schemas for API response serialization."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

TANGGAL_INPUT_FORMAT = "%Y-%m-%d %H:%M:%S"


class HistoryResponseItem(BaseModel):
    """A device usage entry joined with its category."""

    id: int = Field(..., description="Usage entry id")
    brand: str = Field(..., description="Device brand")
    nama_perangkat: str = Field(..., description="Device name")
    daya: float = Field(..., description="Power draw in watts")
    durasi: float = Field(..., description="Usage duration in hours")
    tanggal_input: str = Field(
        ..., description="When the entry was recorded (YYYY-MM-DD HH:MM:SS)"
    )
    category_id: int = Field(..., description="Category id")
    category_name: str = Field(..., description="Category name")

    @field_validator("tanggal_input", mode="before")
    @classmethod
    def _format_tanggal_input(cls, value):
        if isinstance(value, datetime):
            return value.strftime(TANGGAL_INPUT_FORMAT)
        return value


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
