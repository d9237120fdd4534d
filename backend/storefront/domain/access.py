"""
Access rules evaluation.

Rules are attached to content rows and fragments as a small JSON object:

    {"auth": "any" | "logged_in" | "logged_out",
     "subscription": "any" | "required" | "none",
     "plans": ["pro", "enterprise"]}

The same evaluator gates whole pages (advisory, the template decides what
to do with ``subscription_required``) and widgets (enforced).
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from storefront.utils.json_fields import parse_json_field


@dataclass(frozen=True)
class PermissionContext:
    is_logged_in: bool = False
    has_active_subscription: bool = False
    plan_slug: Optional[str] = None

    @classmethod
    def from_customer(cls, customer) -> "PermissionContext":
        if customer is None:
            return cls()
        active = bool(getattr(customer, "has_active_subscription", False))
        return cls(
            is_logged_in=True,
            has_active_subscription=active,
            plan_slug=getattr(customer, "subscription_plan", None) if active else None,
        )


ANONYMOUS = PermissionContext()


def parse_access_rules(raw: Any) -> Optional[dict]:
    rules = parse_json_field(raw)
    return rules if isinstance(rules, dict) else None


def _auth_allows(rule: Optional[str], ctx: PermissionContext) -> bool:
    if rule == "logged_in":
        return ctx.is_logged_in
    if rule == "logged_out":
        return not ctx.is_logged_in
    return True


def _subscription_allows(rule: Optional[str], ctx: PermissionContext) -> bool:
    if rule == "required":
        return ctx.has_active_subscription
    if rule == "none":
        return not ctx.has_active_subscription
    return True


def _plans_allow(plans: Any, ctx: PermissionContext) -> bool:
    if not plans or not isinstance(plans, (list, tuple)):
        return True
    if not ctx.has_active_subscription:
        return False
    return ctx.plan_slug in plans


def can_access(rules: Optional[Mapping[str, Any]], context: PermissionContext = ANONYMOUS) -> bool:
    """
    True when every clause of ``rules`` passes for ``context``.
    Missing or empty rules always allow.
    """
    if not rules:
        return True

    return (
        _auth_allows(rules.get("auth"), context)
        and _subscription_allows(rules.get("subscription"), context)
        and _plans_allow(rules.get("plans"), context)
    )
