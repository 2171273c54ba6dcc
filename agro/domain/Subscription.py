"""Subscription plans: Gratis < Pro < Business."""
from enum import Enum

from agro.utilities.constants import PLAN_PRICES, PLAN_RANK


class SubscriptionPlan(str, Enum):
    GRATIS = "Gratis"
    PRO = "Pro"
    BUSINESS = "Business"

    @property
    def rank(self) -> int:
        return PLAN_RANK[self.value]

    @property
    def monthly_price(self) -> int:
        return PLAN_PRICES[self.value]

    @staticmethod
    def parse(value):
        '''Returns the plan for a name, or None for empty/unknown values.'''
        if isinstance(value, SubscriptionPlan):
            return value
        try:
            return SubscriptionPlan(value)
        except ValueError:
            return None


PLAN_FEATURES = {
    SubscriptionPlan.GRATIS: ["I miei ortaggi", "Check List", "Meteo", "Faq"],
    SubscriptionPlan.PRO: ["Raccolti", "Il tuo AgroGiardiniere", "Community", "E-Commerce"],
    SubscriptionPlan.BUSINESS: ["Progetta il tuo Orto", "Entrate/Uscite"],
}


def plan_catalog():
    """Plans as shown on the upgrade page; each tier includes the features of the lower ones."""
    catalog = []
    included = []
    for plan in SubscriptionPlan:
        included = included + PLAN_FEATURES[plan]
        catalog.append({
            "name": plan.value,
            "price": plan.monthly_price,
            "features": list(included),
        })
    return catalog
