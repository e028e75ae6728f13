from __future__ import annotations

import logging

from pydantic import ValidationError

from .models import Settings
from .storage import SettingsStore

logger = logging.getLogger(__name__)


class SettingsManager:
    """起動時に一度読み込んだ設定を保持し、変更のたびに永続化する。"""

    def __init__(self, store: SettingsStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings if settings is not None else Settings()

    @classmethod
    def load(cls, store: SettingsStore) -> "SettingsManager":
        return cls(store, Settings.from_mapping(store.load()))

    @property
    def settings(self) -> Settings:
        return self._settings

    def update(self, **changes: object) -> Settings:
        unknown = sorted(set(changes) - set(Settings.model_fields))
        if unknown:
            raise ValueError(f"未知の設定項目です: {', '.join(unknown)}")

        merged = {**self._settings.model_dump(), **changes}
        try:
            updated = Settings.model_validate(merged)
        except ValidationError as exc:
            raise ValueError(f"設定値が不正です: {exc}") from exc

        self._settings = updated
        self._store.save(updated)
        logger.info("settings_updated: %s", sorted(changes))
        return updated


__all__ = ["SettingsManager"]
