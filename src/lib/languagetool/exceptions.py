from __future__ import annotations


class LanguageToolError(RuntimeError):
    """リモート校正サービス呼び出しの失敗を表す例外。"""


__all__ = ["LanguageToolError"]
