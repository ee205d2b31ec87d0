from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FetchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    indicator_id: Optional[str] = Field(default=None, alias="indicatorId")


class IndicatorReading(BaseModel):
    """A fetched indicator value with the display metadata the model reports."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    value: float
    change: Optional[str] = None
    as_of: Optional[str] = Field(default=None, alias="asOf")

    @field_validator("change", mode="before")
    @classmethod
    def coerce_change(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("as_of", mode="before")
    @classmethod
    def coerce_as_of(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
