from __future__ import annotations

import logging
import os
import time

import httpx
from pydantic import ValidationError

from src.config.defaults import DEFAULT_LANGUAGE, DEFAULT_SERVICE_URL, DEFAULT_TIMEOUT_SECONDS, SERVICE_URL_ENV

from .exceptions import LanguageToolError
from .models import CheckResponse, CorrectionMatch

logger = logging.getLogger(__name__)


class LanguageToolClient:
    """LanguageTool 互換 API (/v2/check) を呼び出す同期クライアント。"""

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        language: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = 1,
        retry_interval: float = 0.5,
    ) -> None:
        self.endpoint = endpoint or os.getenv(SERVICE_URL_ENV) or DEFAULT_SERVICE_URL
        self.language = language or DEFAULT_LANGUAGE
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.retry_interval = retry_interval

    def check(self, text: str, *, language: str | None = None) -> list[CorrectionMatch]:
        """テキストを送信し、指摘の一覧を返す。"""

        form = {"text": text, "language": language or self.language}
        headers = {"Accept": "application/json"}

        for attempt in range(self.max_retries + 1):
            try:
                response = httpx.post(self.endpoint, data=form, headers=headers, timeout=self.timeout)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status < 500 or attempt == self.max_retries:
                    raise LanguageToolError(f"LanguageTool API が HTTP {status} を返しました。") from exc
                logger.warning("LanguageTool API が一時的に失敗 (%s)。リトライします。", status)
            except httpx.RequestError as exc:  # ネットワークエラー
                if attempt == self.max_retries:
                    raise LanguageToolError(f"LanguageTool API への接続に失敗しました: {exc}") from exc
                logger.warning("LanguageTool API への接続が失敗しました。リトライします。")
            except httpx.InvalidURL as exc:  # 送信前に失敗するためリトライしない
                raise LanguageToolError(f"LanguageTool API の URL が不正です: {exc}") from exc
            except UnicodeEncodeError as exc:  # 孤立サロゲートなどフォームに符号化できない文字
                raise LanguageToolError("送信テキストを UTF-8 に符号化できません。") from exc
            else:
                return self._parse_matches(response)

            time.sleep(self.retry_interval * (attempt + 1))

        raise LanguageToolError("LanguageTool API の呼び出しに連続して失敗しました。")

    @staticmethod
    def _parse_matches(response: httpx.Response) -> list[CorrectionMatch]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise LanguageToolError("LanguageTool API の応答が JSON ではありません。") from exc

        if payload is None:
            return []
        try:
            parsed = CheckResponse.model_validate(payload)
        except ValidationError as exc:
            raise LanguageToolError("LanguageTool API の応答を解釈できませんでした。") from exc

        logger.debug("languagetool_matches: count=%d", len(parsed.matches))
        return parsed.matches


__all__ = ["LanguageToolClient", "LanguageToolError"]
