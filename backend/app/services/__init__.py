"""Services for tablecop."""

from .autofix_service import AutofixService
from .linting_service import Inspection, LintingService

__all__ = [
    "AutofixService",
    "Inspection",
    "LintingService",
]
