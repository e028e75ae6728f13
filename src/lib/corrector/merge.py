from __future__ import annotations

import logging
from typing import Iterable

from src.lib.languagetool.models import CorrectionMatch

from .types import CorrectionPatch, apply_patches

logger = logging.getLogger(__name__)

_BMP_MAX = "\uffff"


def _utf16_index_table(text: str) -> dict[int, int] | None:
    """UTF-16 コード単位位置 → 文字位置 の対応表。BMP 外の文字がなければ None。"""

    if not text or max(text) <= _BMP_MAX:
        return None
    table: dict[int, int] = {}
    unit = 0
    for index, char in enumerate(text):
        table[unit] = index
        unit += 2 if char > _BMP_MAX else 1
    table[unit] = len(text)
    return table


def patches_from_matches(matches: Iterable[CorrectionMatch], text: str | None = None) -> list[CorrectionPatch]:
    """置換候補を持つ指摘だけを、先頭候補を採用したパッチへ変換する（入力順を維持）。

    LanguageTool の offset/length は UTF-16 コード単位なので、text を渡すと文字位置へ換算する。
    """

    table = _utf16_index_table(text) if text is not None else None
    patches: list[CorrectionPatch] = []
    for match in matches:
        if not match.replacements:
            continue
        start, end = match.offset, match.offset + match.length
        if table is not None:
            start, end = table.get(start), table.get(end)
            if start is None or end is None:
                logger.warning(
                    "match_skipped: offset=%d length=%d reason=UTF-16 位置を文字位置へ換算できません",
                    match.offset,
                    match.length,
                )
                continue
        patches.append(
            CorrectionPatch.at(
                start,
                end - start,
                match.replacements[0].value or "",
                rule_id=match.rule_id,
                message=match.message,
            )
        )
    return patches


def apply_remote_corrections(text: str, matches: Iterable[CorrectionMatch]) -> str:
    return apply_patches(text, patches_from_matches(matches, text))


__all__ = ["apply_remote_corrections", "patches_from_matches"]
