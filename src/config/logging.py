from __future__ import annotations

import logging
import os

from .defaults import LOG_LEVEL_ENV

_LEVEL_ALIASES: dict[str, int] = {
    "WARN": logging.WARNING,
    "TRACE": logging.DEBUG,
    "FATAL": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _normalize(value: str | int | None) -> int:
    if isinstance(value, int):
        return value

    if value is None:
        return logging.INFO

    text = value.strip()
    if not text:
        return logging.INFO

    if text.isdigit():
        return int(text)

    upper = text.upper()
    if upper in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[upper]

    resolved = logging.getLevelName(upper)
    return resolved if isinstance(resolved, int) else logging.INFO


def resolve_log_level(*candidates: str | int | None, default: str | int | None = None) -> int:
    """最初に指定された候補をログレベルへ変換する。空文字の候補は読み飛ばす。"""

    for candidate in candidates:
        if candidate is None:
            continue
        if isinstance(candidate, str) and not candidate.strip():
            continue
        return _normalize(candidate)

    if default is not None:
        return _normalize(default)

    return logging.INFO


def setup_logging(
    level: str | int | None = None,
    *,
    env_key: str = LOG_LEVEL_ENV,
    default: str | int | None = logging.INFO,
) -> int:
    resolved = resolve_log_level(level, os.getenv(env_key), os.getenv("LOG_LEVEL"), default=default)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=True)
    logging.getLogger().setLevel(resolved)
    # httpx はリクエスト毎に INFO を出すため、DEBUG 指定時以外は抑制する
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
    return resolved
