"""GitVersion YAML document model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitVersionFile(BaseModel):
    """GitVersion YAML definition. Only ``next-version`` is read."""

    model_config = ConfigDict(extra="ignore")

    next_version: Optional[str] = Field(None, alias="next-version")

    @field_validator("next_version", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # YAML turns `next-version: 1.2` into a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
