from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.lib.corrector import CorrectionPatch, CorrectionResult, CorrectionSpan
from src.lib.settings import Settings


class CorrectionSpanPayload(BaseModel):
    start: int = Field(..., ge=0, description="置換対象の開始インデックス（0-based）")
    end: int = Field(..., ge=0, description="置換対象の終了インデックス（0-based, open）")

    @model_validator(mode="after")
    def validate_range(self) -> "CorrectionSpanPayload":
        if self.end < self.start:
            raise ValueError("end must be greater than or equal to start")
        return self

    @classmethod
    def from_span(cls, span: CorrectionSpan) -> "CorrectionSpanPayload":
        return cls(start=span.start, end=span.end)


class CorrectionPatchPayload(BaseModel):
    span: CorrectionSpanPayload
    replacement: str = Field(..., description="差し替える文字列")
    rule_id: Optional[str] = Field(None, description="指摘元のルール ID")
    message: Optional[str] = Field(None, description="サービスが返した説明文")

    @classmethod
    def from_patch(cls, patch: CorrectionPatch) -> "CorrectionPatchPayload":
        return cls(
            span=CorrectionSpanPayload.from_span(patch.span),
            replacement=patch.replacement,
            rule_id=patch.rule_id,
            message=patch.message,
        )


class CorrectionRequestPayload(BaseModel):
    text: str = Field(..., min_length=1, description="補正対象のテキスト")
    language: Optional[str] = Field(None, description="言語タグ。未指定時は設定値")
    use_remote: Optional[bool] = Field(None, description="リモート校正を使うか。未指定時は設定値")

    def resolve_settings(self, base: Settings) -> Settings:
        overrides: dict[str, object] = {}
        language = (self.language or "").strip()
        if language:
            overrides["language"] = language
        if self.use_remote is not None:
            overrides["use_remote_correction"] = self.use_remote
        if not overrides:
            return base
        return Settings.model_validate({**base.model_dump(), **overrides})


class CorrectionResponsePayload(BaseModel):
    source_text: str = Field(..., description="補正処理前のテキスト")
    quick_fixed_text: str = Field(..., description="quick fix 適用後のテキスト")
    text: str = Field(..., description="補正後のテキスト")
    patches: list[CorrectionPatchPayload] = Field(..., description="適用したリモート補正パッチ")
    patch_count: int = Field(..., ge=0, description="パッチ数")
    remote_error: Optional[str] = Field(None, description="リモート補正が失敗した場合の理由")

    @classmethod
    def from_result(cls, result: CorrectionResult) -> "CorrectionResponsePayload":
        return cls(
            source_text=result.source_text,
            quick_fixed_text=result.quick_fixed_text,
            text=result.corrected_text,
            patches=[CorrectionPatchPayload.from_patch(patch) for patch in result.patches],
            patch_count=len(result.patches),
            remote_error=result.remote_error,
        )


__all__ = [
    "CorrectionSpanPayload",
    "CorrectionPatchPayload",
    "CorrectionRequestPayload",
    "CorrectionResponsePayload",
]
