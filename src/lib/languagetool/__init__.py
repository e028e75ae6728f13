from .client import LanguageToolClient
from .exceptions import LanguageToolError
from .models import CheckResponse, CorrectionMatch, MatchRule, Replacement

__all__ = [
    "CheckResponse",
    "CorrectionMatch",
    "LanguageToolClient",
    "LanguageToolError",
    "MatchRule",
    "Replacement",
]
