"""
API endpoints for Ruby layout inspection and autocorrect.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..config import ConfigurationError, TablecopSettings, config
from ..models.autofix import AutofixReport
from ..models.linting import LintReport
from ..services.autofix_service import AutofixService
from ..services.linting_service import LintingService
from ..services.policies import POLICIES

logger = logging.getLogger(__name__)

router = APIRouter()


class InspectRequest(BaseModel):
    """Request model for inspect / autocorrect."""
    code: str
    max_line_length: Optional[int] = None
    max_passes: Optional[int] = None
    disabled_policies: Optional[List[str]] = None


class PolicyInfo(BaseModel):
    """One entry of the policy catalogue."""
    id: str
    rule_id: str
    cop_name: str
    description: str
    enabled: bool


def _settings(request: InspectRequest) -> TablecopSettings:
    try:
        return config.settings(
            max_line_length=request.max_line_length,
            max_passes=request.max_passes,
            disabled_policies=request.disabled_policies,
        )
    except ConfigurationError as e:
        logger.warning(f"Rejected configuration: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/inspect", response_model=LintReport)
async def inspect_code(request: InspectRequest) -> LintReport:
    """
    Report layout issues for one Ruby source, without rewriting it.

    Each fixable issue carries the edit that would realize it.
    """
    settings = _settings(request)
    report = LintingService(settings).lint(request.code)
    logger.info(f"Inspected {len(request.code)} chars: {len(report.issues)} issue(s)")
    return report


@router.post("/autocorrect", response_model=AutofixReport)
async def autocorrect_code(request: InspectRequest) -> AutofixReport:
    """Rewrite one Ruby source to its fixed point."""
    settings = _settings(request)
    return AutofixService(LintingService(settings)).autocorrect(request.code)


@router.get("/policies", response_model=List[PolicyInfo])
async def list_policies() -> List[PolicyInfo]:
    """Catalogue of rewrite policies and whether the current configuration enables them."""
    try:
        settings = config.settings()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [
        PolicyInfo(
            id=kind.value,
            rule_id=policy.rule_id,
            cop_name=policy.cop_name,
            description=policy.description,
            enabled=settings.is_enabled(kind),
        )
        for kind, policy in POLICIES.items()
    ]
