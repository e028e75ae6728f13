from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Replacement(BaseModel):
    """置換候補 1 件。value が欠けている場合は空文字として扱う。"""

    model_config = ConfigDict(extra="ignore")
    value: str = ""


class MatchRule(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: Optional[str] = None
    description: Optional[str] = None


class CorrectionMatch(BaseModel):
    """リモートサービスが返す指摘 1 件（元テキスト上の offset/length）。"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    offset: int
    length: int
    replacements: list[Replacement] = Field(default_factory=list)
    message: Optional[str] = None
    short_message: Optional[str] = Field(None, alias="shortMessage")
    rule: Optional[MatchRule] = None

    @property
    def rule_id(self) -> str | None:
        return self.rule.id if self.rule else None


class CheckResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")
    matches: list[CorrectionMatch] = Field(default_factory=list)


__all__ = ["CheckResponse", "CorrectionMatch", "MatchRule", "Replacement"]
