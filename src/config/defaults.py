from __future__ import annotations

import os
from pathlib import Path

"""アプリ全体で共有する既定値。"""

DEFAULT_LANGUAGE = "en-US"
"""リモート校正サービスへ渡すデフォルト言語タグ。"""

DEFAULT_SERVICE_URL = "https://api.languagetool.org/v2/check"
"""LanguageTool 互換のチェック API エンドポイント。"""

DEFAULT_TIMEOUT_SECONDS = 20.0
"""リモート校正リクエストのタイムアウト秒数。"""

SERVICE_URL_ENV = "AUTOCORRECT_SERVICE_URL"
SETTINGS_PATH_ENV = "AUTOCORRECT_SETTINGS_PATH"
LOG_LEVEL_ENV = "AUTOCORRECT_LOG_LEVEL"


def default_settings_path() -> Path:
    explicit = os.getenv(SETTINGS_PATH_ENV)
    if explicit:
        return Path(explicit).expanduser()

    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home).expanduser() if config_home else Path.home() / ".config"
    return base / "autocorrect" / "settings.json"
