"""Pydantic models for rendered profile reports."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ReportRow(BaseModel):
    """One ranked source line of a profile report."""

    identity: str = Field(..., description="Line identity rendered as 'file:line'")
    count: int = Field(..., ge=1, description="How many times the line ran")
    total_ms: float = Field(..., ge=0.0, description="Total elapsed time in milliseconds")
    average_ms: float = Field(..., ge=0.0, description="Average elapsed time per run in milliseconds")
    source: str = Field(default="", description="Source text of the line, stripped")


class ProfileReport(BaseModel):
    """Report returned by the report builder and handed to renderers."""

    rows: List[ReportRow] = Field(default_factory=list)
    max_rows: int = Field(..., ge=0)
    session_ms: Optional[float] = Field(
        default=None,
        description="Length of the latest start/stop cycle in milliseconds",
    )
    generated_at: datetime = Field(default_factory=datetime.now)
    profiling: Optional[Dict[str, float]] = Field(
        default=None, description="Per-phase report building timings in ms"
    )

    @field_validator("rows")
    @classmethod
    def ensure_ranked(cls, value: List[ReportRow]) -> List[ReportRow]:
        """Guard against rows that are not ordered by total elapsed time."""

        for previous, current in zip(value, value[1:]):
            if current.total_ms > previous.total_ms:
                raise ValueError(
                    f"row '{current.identity}' outranks '{previous.identity}' on total elapsed time"
                )
        return value
