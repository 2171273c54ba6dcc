"""Closed set of dashboard views and the plan each one requires."""
from enum import Enum
from typing import List, Union

from agro.domain.Subscription import SubscriptionPlan
from agro.utilities.constants import PLAN_ALL


class View(str, Enum):
    DASHBOARD = "Il mio Orto"
    VEGETABLES = "I miei ortaggi"
    CHECKLIST = "Check List"
    WEATHER = "Meteo"
    FAQ = "Faq"
    HARVESTS = "Raccolti"
    AGROGARDENER = "Il tuo AgroGiardiniere"
    COMMUNITY = "Community"
    ECOMMERCE = "E-Commerce"
    DESIGN_GARDEN = "Progetta il tuo Orto"
    CASH_FLOW = "Entrate/Uscite"
    UPGRADE = "Upgrade"


class NavItem:
    def __init__(self, view: View, icon: str, required_plan: Union[SubscriptionPlan, str]):
        self.view = view
        self.icon = icon
        self.required_plan = required_plan

    @property
    def name(self) -> str:
        return self.view.value

    def to_dict(self):
        plan = self.required_plan
        return {
            "name": self.name,
            "icon": self.icon,
            "required_plan": plan.value if isinstance(plan, SubscriptionPlan) else plan,
        }


NAV_ITEMS: List[NavItem] = [
    NavItem(View.DASHBOARD, "home", PLAN_ALL),
    NavItem(View.VEGETABLES, "leaf", SubscriptionPlan.GRATIS),
    NavItem(View.CHECKLIST, "checklist", SubscriptionPlan.GRATIS),
    NavItem(View.WEATHER, "sun", SubscriptionPlan.GRATIS),
    NavItem(View.FAQ, "question", PLAN_ALL),
    NavItem(View.HARVESTS, "harvest", SubscriptionPlan.PRO),
    NavItem(View.AGROGARDENER, "beaker", SubscriptionPlan.PRO),
    NavItem(View.COMMUNITY, "community", SubscriptionPlan.PRO),
    NavItem(View.ECOMMERCE, "store", SubscriptionPlan.PRO),
    NavItem(View.DESIGN_GARDEN, "sparkles", SubscriptionPlan.BUSINESS),
    NavItem(View.CASH_FLOW, "cash", SubscriptionPlan.BUSINESS),
    NavItem(View.UPGRADE, "upgrade", PLAN_ALL),
]

REQUIRED_PLAN = {item.view: item.required_plan for item in NAV_ITEMS}
