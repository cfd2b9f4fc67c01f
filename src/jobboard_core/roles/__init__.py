"""Account role resolution."""

from jobboard_core.roles.resolver import RoleDecision, RoleResolver, first_match, resolve_role
from jobboard_core.roles.rules import ROLE_RULES, RoleContext, RoleRule, normalize_role_value

__all__ = [
    "ROLE_RULES",
    "RoleContext",
    "RoleDecision",
    "RoleResolver",
    "RoleRule",
    "first_match",
    "normalize_role_value",
    "resolve_role",
]
