from __future__ import annotations

import logging

from src.lib.editor import EditorSurface
from src.lib.settings import Settings

from .pipeline import CorrectionPipeline
from .types import CorrectionResult

logger = logging.getLogger(__name__)


def correct_document(
    editor: EditorSurface,
    *,
    settings: Settings,
    pipeline: CorrectionPipeline | None = None,
) -> CorrectionResult | None:
    """文書全体を補正して書き戻す。空白のみの文書は何もしない。"""

    text = editor.get_document_text()
    if not text.strip():
        logger.debug("correct_document_skipped: blank document")
        return None

    executor = pipeline or CorrectionPipeline(settings=settings)
    result = executor.run(text)
    editor.replace_document_text(result.corrected_text)
    return result


def correct_selection(
    editor: EditorSurface,
    *,
    settings: Settings,
    pipeline: CorrectionPipeline | None = None,
) -> CorrectionResult | None:
    """選択範囲のみを補正して置き換える。"""

    text = editor.get_selected_text()
    if not text.strip():
        logger.debug("correct_selection_skipped: blank selection")
        return None

    executor = pipeline or CorrectionPipeline(settings=settings)
    result = executor.run(text)
    editor.replace_selection(result.corrected_text)
    return result


__all__ = ["correct_document", "correct_selection"]
