"""
Rewrite policies for tablecop.

Each policy supplies extraction, grouping, a geometry decision and a message;
the pass runner looks them up here by `PolicyKind`. Policies are run in the
order below, which is also the order of their diagnostics for one position.
"""

from typing import Dict, List

from ...models.engine import PolicyKind
from . import align_assignments, align_methods, condense_when, safe_endless_method
from .base import Policy

POLICIES: Dict[PolicyKind, Policy] = {
    PolicyKind.CONDENSE_WHEN: condense_when.POLICY,
    PolicyKind.ALIGN_ASSIGNMENTS: align_assignments.POLICY,
    PolicyKind.ALIGN_METHODS: align_methods.POLICY,
    PolicyKind.SAFE_ENDLESS_METHOD: safe_endless_method.POLICY,
}


def enabled_policies(disabled: List[PolicyKind]) -> List[Policy]:
    return [policy for kind, policy in POLICIES.items() if kind not in disabled]


__all__ = ["POLICIES", "Policy", "enabled_policies"]
