"""First-match-wins role resolution over the ordered ROLE_RULES table."""

import logging
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from jobboard_core.models.entities import CanonicalRole
from jobboard_core.models.raw import RawRecord

from .rules import ROLE_RULES, RoleContext, RoleRule

logger = logging.getLogger(__name__)

DEFAULT_RULE = "default"


class RoleDecision(BaseModel):
    """Resolved role plus the rule that decided it."""

    role: CanonicalRole
    rule: str = Field(..., description="Name of the deciding rule, or 'default'")


def first_match(
    rules: Sequence[RoleRule],
    ctx: RoleContext,
    default: CanonicalRole,
) -> RoleDecision:
    """Evaluate rules in order; the first predicate that holds decides."""
    for rule in rules:
        if rule.predicate(ctx):
            return RoleDecision(role=rule.role, rule=rule.name)
    return RoleDecision(role=default, rule=DEFAULT_RULE)


class RoleResolver:
    """
    Decides JobSeeker vs Recruiter for an account record.
    Pure and total: no I/O, no clock, always returns a role.
    """

    def __init__(
        self,
        rules: Sequence[RoleRule] = ROLE_RULES,
        default: CanonicalRole = CanonicalRole.JOB_SEEKER,
    ):
        self.rules = tuple(rules)
        # Provisional product decision: accounts without any role signal are job seekers
        self.default = default

    def explain(
        self,
        record: "RawRecord | Mapping[str, Any] | None",
        session_hint: Optional[str] = None,
    ) -> RoleDecision:
        ctx = RoleContext(record=RawRecord.of(record), hint=session_hint)
        decision = first_match(self.rules, ctx, self.default)
        logger.debug("Role %s decided by rule %s", decision.role.value, decision.rule)
        return decision

    def resolve(
        self,
        record: "RawRecord | Mapping[str, Any] | None",
        session_hint: Optional[str] = None,
    ) -> CanonicalRole:
        return self.explain(record, session_hint).role


_default_resolver = RoleResolver()


def resolve_role(
    record: "RawRecord | Mapping[str, Any] | None",
    session_hint: Optional[str] = None,
) -> CanonicalRole:
    """Resolve with the default rule table and default role."""
    return _default_resolver.resolve(record, session_hint)
