"""Subscription plans and their monthly credit allowances."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlanDefinition:
    """A billing plan."""

    code: str
    name: str
    price: int
    credits: int
    features: list[str] = field(default_factory=list)


PLANS: dict[str, PlanDefinition] = {
    "FREE": PlanDefinition(
        code="FREE",
        name="Free Trial",
        price=0,
        credits=100,
        features=["100 One-time Credits", "Bulk Generation", "Email Support"],
    ),
    "STARTER": PlanDefinition(
        code="STARTER",
        name="Starter",
        price=5,
        credits=250,
        features=["250 Credits/mo", "Bulk Generation", "Email Support"],
    ),
    "GROWTH": PlanDefinition(
        code="GROWTH",
        name="Growth",
        price=29,
        credits=1000,
        features=["1,000 Credits/mo", "Bulk Generation", "Email Support"],
    ),
    "PRO": PlanDefinition(
        code="PRO",
        name="Pro",
        price=79,
        credits=5000,
        features=["5,000 Credits/mo", "Bulk Generation", "Auto-Processing", "Priority Support"],
    ),
}


def get_plan_credits(plan: str) -> int:
    """Credits granted per cycle by a plan, defaulting to the free allowance."""
    definition = PLANS.get(plan)
    return definition.credits if definition else PLANS["FREE"].credits


def get_plan_name(plan: str) -> str:
    """Display name for a plan code."""
    definition = PLANS.get(plan)
    return definition.name if definition else PLANS["FREE"].name
