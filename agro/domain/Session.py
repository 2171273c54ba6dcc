"""Session: the logged-in farmer and their plan.

User and plan survive restarts (see Session_Repository); the notification
flags below only live as long as the process.
"""
from typing import Optional, Set

from agro.domain.Subscription import SubscriptionPlan
from agro.domain.User import User


class Session:
    def __init__(self, user: Optional[User] = None, plan: Optional[SubscriptionPlan] = None):
        self.user = user
        self.plan = SubscriptionPlan.parse(plan) if plan else None
        self.notification_permission = "default"  # default | granted | denied
        self.banner_dismissed = False
        self.alert_keys: Set[str] = set()

    @property
    def is_active(self) -> bool:
        return self.user is not None and self.plan is not None

    @property
    def show_notification_banner(self) -> bool:
        return self.notification_permission == "default" and not self.banner_dismissed

    def start(self, user: User, plan: SubscriptionPlan):
        self.user = user
        self.plan = SubscriptionPlan.parse(plan)
        return self

    def change_plan(self, plan: SubscriptionPlan):
        self.plan = SubscriptionPlan.parse(plan)
        return self

    def logout(self):
        self.user = None
        self.plan = None
        self.alert_keys.clear()
        self.banner_dismissed = False
        return self

    def to_dict(self):
        return {
            "user": self.user.to_dict() if self.user else None,
            "plan": self.plan.value if self.plan else None,
        }

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        user = User.from_dict(d["user"]) if d.get("user") else None
        return Session(user, d.get("plan"))
