from pydantic import BaseModel

from .scheduled_class import ScheduledClass


class DashboardStats(BaseModel):
    active_clients: int
    revenue: int
    visits_today: int
    active_subscriptions: int


class Dashboard(BaseModel):
    stats: DashboardStats
    today_classes: list[ScheduledClass]
