from . import (
    aggregators,
    attendance,
    auth,
    clients,
    dashboard,
    instructors,
    misc,
    news,
    plans,
    portal,
    profiles,
    schedule,
    settings,
    subscriptions,
    trials,
)

__all__ = [
    "aggregators",
    "attendance",
    "auth",
    "clients",
    "dashboard",
    "instructors",
    "misc",
    "news",
    "plans",
    "portal",
    "profiles",
    "schedule",
    "settings",
    "subscriptions",
    "trials",
]
