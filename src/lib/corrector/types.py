from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)


class CorrectionError(ValueError):
    """補正処理に関する汎用例外。"""


class PatchValidationError(CorrectionError):
    """パッチが適用できない場合に発生する例外。"""


@dataclass(frozen=True)
class CorrectionSpan:
    start: int
    end: int

    def validate(self, text_length: int) -> None:
        if not (0 <= self.start <= self.end <= text_length):
            raise PatchValidationError(
                f"span out of range: start={self.start}, end={self.end}, length={text_length}"
            )


@dataclass(frozen=True)
class CorrectionPatch:
    span: CorrectionSpan
    replacement: str
    rule_id: str | None = None
    message: str | None = None

    @classmethod
    def at(cls, offset: int, length: int, replacement: str, **extra: str | None) -> "CorrectionPatch":
        return cls(span=CorrectionSpan(start=offset, end=offset + length), replacement=replacement, **extra)


@dataclass(frozen=True)
class CorrectionResult:
    source_text: str
    quick_fixed_text: str
    corrected_text: str
    patches: Tuple[CorrectionPatch, ...] = field(default_factory=tuple)
    remote_error: str | None = None

    def is_modified(self) -> bool:
        return self.corrected_text != self.source_text


@dataclass(frozen=True)
class RemoteOutcome:
    """リモート補正の取得結果。成功時は patches、失敗時は error を保持する。"""

    patches: Tuple[CorrectionPatch, ...] = field(default_factory=tuple)
    error: str | None = None

    @classmethod
    def success(cls, patches: Sequence[CorrectionPatch]) -> "RemoteOutcome":
        return cls(patches=tuple(patches))

    @classmethod
    def failure(cls, error: str) -> "RemoteOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


def select_patches(text: str, patches: Sequence[CorrectionPatch]) -> Tuple[CorrectionPatch, ...]:
    """適用可能なパッチを選び、位置の昇順で返す。

    offset の降順（同一 offset は入力順）に走査し、範囲外のパッチと、
    既に採用したパッチの開始位置をまたぐパッチは捨てる。
    """

    if not patches:
        return ()

    text_length = len(text)
    ordered = sorted(enumerate(patches), key=lambda item: (-item[1].span.start, item[0]))
    boundary = text_length
    accepted: list[CorrectionPatch] = []

    for index, patch in ordered:
        try:
            patch.span.validate(text_length)
        except PatchValidationError as exc:
            logger.warning("patch_skipped: index=%d reason=%s", index, exc)
            continue
        if patch.span.end > boundary:
            logger.debug(
                "patch_overlap_skipped: index=%d start=%d end=%d boundary=%d",
                index,
                patch.span.start,
                patch.span.end,
                boundary,
            )
            continue
        accepted.append(patch)
        boundary = patch.span.start

    accepted.reverse()
    return tuple(accepted)


def apply_patches(text: str, patches: Sequence[CorrectionPatch]) -> str:
    return splice_patches(text, select_patches(text, patches))


def splice_patches(text: str, selected: Sequence[CorrectionPatch]) -> str:
    """select_patches 済み（昇順・重なりなし）のパッチを文字列へ組み込む。"""

    if not selected:
        return text

    # 後方から組み立てるので、未適用パッチの offset は常に元テキスト上で有効
    fragments: list[str] = []
    cursor = len(text)
    for patch in reversed(selected):
        fragments.append(text[patch.span.end : cursor])
        fragments.append(patch.replacement)
        cursor = patch.span.start

    fragments.append(text[:cursor])
    return "".join(reversed(fragments))


__all__ = [
    "CorrectionError",
    "PatchValidationError",
    "CorrectionSpan",
    "CorrectionPatch",
    "CorrectionResult",
    "RemoteOutcome",
    "apply_patches",
    "select_patches",
    "splice_patches",
]
