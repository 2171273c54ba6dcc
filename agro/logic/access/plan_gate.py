"""Subscription gate: decides which views a plan can open."""
from typing import List, Optional, Union

from agro.domain.Navigation import NAV_ITEMS, REQUIRED_PLAN, NavItem, View
from agro.domain.Subscription import SubscriptionPlan
from agro.utilities.constants import PLAN_ALL, PLAN_RANK

__all__ = ["is_feature_allowed", "is_view_allowed", "visible_nav_items"]


def _rank(plan) -> int:
    value = plan.value if isinstance(plan, SubscriptionPlan) else plan
    return PLAN_RANK.get(value, 0)


def is_feature_allowed(required_plan: Union[SubscriptionPlan, str],
                       user_plan: Optional[Union[SubscriptionPlan, str]]) -> bool:
    """True when ``user_plan`` ranks at least ``required_plan``.

    Without a plan nothing is allowed, not even views marked "All".
    """
    if not user_plan:
        return False
    if required_plan == PLAN_ALL:
        return True
    return _rank(user_plan) >= _rank(required_plan)


def is_view_allowed(view: View, user_plan) -> bool:
    return is_feature_allowed(REQUIRED_PLAN[view], user_plan)


def visible_nav_items(user_plan) -> List[NavItem]:
    return [item for item in NAV_ITEMS if is_feature_allowed(item.required_plan, user_plan)]
