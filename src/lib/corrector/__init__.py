"""Quick-fix and remote correction pipeline."""
from __future__ import annotations

from .integration import correct_document, correct_selection
from .merge import apply_remote_corrections, patches_from_matches
from .pipeline import (
    CorrectionPipeline,
    RemoteChecker,
    build_client,
    fetch_remote_patches,
    remote_correct,
    run_correction,
)
from .types import (
    CorrectionError,
    CorrectionPatch,
    CorrectionResult,
    CorrectionSpan,
    PatchValidationError,
    RemoteOutcome,
    apply_patches,
    select_patches,
    splice_patches,
)

__all__ = [
    "CorrectionPipeline",
    "RemoteChecker",
    "run_correction",
    "remote_correct",
    "fetch_remote_patches",
    "build_client",
    "correct_document",
    "correct_selection",
    "apply_remote_corrections",
    "patches_from_matches",
    "CorrectionPatch",
    "CorrectionResult",
    "CorrectionSpan",
    "RemoteOutcome",
    "apply_patches",
    "select_patches",
    "splice_patches",
    "CorrectionError",
    "PatchValidationError",
]
