from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

# 改行を含まない空白文字。改行は折り畳み・削除の対象にしない。
_HSPACE = r"[^\S\r\n]"


@dataclass(frozen=True)
class QuickFixRule:
    """正規表現 1 本で表現できる決定的な置換ルール。"""

    name: str
    pattern: str
    replacement: str
    flags: int = 0

    def compiled(self) -> re.Pattern[str]:
        return re.compile(self.pattern, self.flags)

    def apply(self, text: str) -> str:
        if not text:
            return text
        return self.compiled().sub(self.replacement, text)


DEFAULT_RULES: Tuple[QuickFixRule, ...] = (
    QuickFixRule("capitalize-i", r"\bi\b", "I"),
    QuickFixRule("fix-teh", r"\bteh\b", "the", re.IGNORECASE),
    QuickFixRule("fix-recieve", r"\brecieve\b", "receive", re.IGNORECASE),
    QuickFixRule("collapse-whitespace", rf"({_HSPACE}){_HSPACE}+", r"\1"),
    QuickFixRule("strip-space-before-punctuation", rf"{_HSPACE}+([,.:;?!])", r"\1"),
    QuickFixRule("space-after-punctuation", r"([,;:])(?=\S)", r"\1 "),
)
"""適用順に並べた既定ルール。後段のルールは前段の出力を入力とする。"""


def trace_quick_fixes(
    text: str,
    rules: Sequence[QuickFixRule] = DEFAULT_RULES,
) -> Iterator[tuple[str, str]]:
    """各ルール適用直後の (ルール名, テキスト) を順に返す。"""

    current = text
    for rule in rules:
        current = rule.apply(current)
        yield rule.name, current


def apply_quick_fixes(text: str, rules: Sequence[QuickFixRule] = DEFAULT_RULES) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


__all__ = [
    "DEFAULT_RULES",
    "QuickFixRule",
    "apply_quick_fixes",
    "trace_quick_fixes",
]
