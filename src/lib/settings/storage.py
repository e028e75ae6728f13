from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from src.config.defaults import default_settings_path

from .models import Settings

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    def load(self) -> dict[str, Any]:
        ...

    def save(self, settings: Settings) -> None:
        ...


class JsonSettingsStore:
    """設定を UTF-8 の JSON ファイルとして保存する。"""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> dict[str, Any]:
        """保存済みの (部分的な) 設定を返す。読めない場合は空 dict。"""

        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("設定ファイルを読み込めませんでした。既定値を使用します: %s (%s)", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("設定ファイルの形式が不正です。既定値を使用します: %s", self.path)
            return {}
        return payload

    def save(self, settings: Settings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(), f, ensure_ascii=False, indent=2)
        logger.debug("settings_saved: path=%s", self.path)


__all__ = ["JsonSettingsStore", "SettingsStore"]
