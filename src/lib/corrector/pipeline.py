from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from src.lib.languagetool import CorrectionMatch, LanguageToolClient, LanguageToolError
from src.lib.quickfix import DEFAULT_RULES, QuickFixRule, trace_quick_fixes
from src.lib.settings import Settings

from .merge import patches_from_matches
from .types import CorrectionResult, RemoteOutcome, apply_patches, select_patches, splice_patches

logger = logging.getLogger(__name__)


class RemoteChecker(Protocol):
    def check(self, text: str, *, language: str | None = None) -> list[CorrectionMatch]:
        ...


def build_client(settings: Settings) -> LanguageToolClient:
    return LanguageToolClient(
        endpoint=settings.remote_service_url,
        language=settings.language,
        timeout=settings.timeout_seconds,
    )


def fetch_remote_patches(client: RemoteChecker, text: str, language: str) -> RemoteOutcome:
    """サービス呼び出しの失敗を例外ではなく RemoteOutcome.failure として返す。"""

    try:
        matches = client.check(text, language=language)
    except LanguageToolError as exc:
        return RemoteOutcome.failure(str(exc))
    return RemoteOutcome.success(patches_from_matches(matches, text))


def remote_correct(text: str, *, settings: Settings, client: RemoteChecker | None = None) -> str:
    """リモート補正を適用する。失敗時は入力をそのまま返す。"""

    if not text.strip():
        return text
    outcome = fetch_remote_patches(client or build_client(settings), text, settings.language)
    if not outcome.ok:
        logger.warning("リモート補正に失敗したため元のテキストを返します: %s", outcome.error)
        return text
    return apply_patches(text, outcome.patches)


@dataclass
class CorrectionPipeline:
    settings: Settings = field(default_factory=Settings)
    rules: Sequence[QuickFixRule] = DEFAULT_RULES
    client: RemoteChecker | None = None

    def run(self, text: str) -> CorrectionResult:
        quick_fixed = text
        for rule_name, quick_fixed in trace_quick_fixes(text, self.rules):
            logger.debug("quickfix_step: rule=%s length=%d", rule_name, len(quick_fixed))

        if not self.settings.use_remote_correction or not quick_fixed.strip():
            return CorrectionResult(
                source_text=text,
                quick_fixed_text=quick_fixed,
                corrected_text=quick_fixed,
            )

        outcome = fetch_remote_patches(self._client(), quick_fixed, self.settings.language)
        if not outcome.ok:
            logger.warning("リモート補正に失敗したため quick fix の結果を返します: %s", outcome.error)
            return CorrectionResult(
                source_text=text,
                quick_fixed_text=quick_fixed,
                corrected_text=quick_fixed,
                remote_error=outcome.error,
            )

        applied = select_patches(quick_fixed, outcome.patches)
        corrected = splice_patches(quick_fixed, applied)
        logger.debug("remote_patches: received=%d applied=%d", len(outcome.patches), len(applied))
        return CorrectionResult(
            source_text=text,
            quick_fixed_text=quick_fixed,
            corrected_text=corrected,
            patches=applied,
        )

    def _client(self) -> RemoteChecker:
        if self.client is None:
            self.client = build_client(self.settings)
        return self.client


def run_correction(
    text: str,
    *,
    settings: Settings | None = None,
    pipeline: CorrectionPipeline | None = None,
) -> CorrectionResult:
    executor = pipeline or CorrectionPipeline(settings=settings if settings is not None else Settings())
    return executor.run(text)


__all__ = [
    "CorrectionPipeline",
    "RemoteChecker",
    "build_client",
    "fetch_remote_patches",
    "remote_correct",
    "run_correction",
]
