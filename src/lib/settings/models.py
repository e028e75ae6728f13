from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from src.config.defaults import DEFAULT_LANGUAGE, DEFAULT_SERVICE_URL, DEFAULT_TIMEOUT_SECONDS


class Settings(BaseModel):
    """永続化される設定レコード。未指定の項目は既定値で補う。"""

    model_config = ConfigDict(extra="ignore", frozen=True)
    use_remote_correction: bool = True
    remote_service_url: str = DEFAULT_SERVICE_URL
    language: str = DEFAULT_LANGUAGE
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Settings":
        if not data:
            return cls()
        return cls.model_validate(dict(data))


__all__ = ["Settings"]
