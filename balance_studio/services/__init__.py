from . import (
    account_service,
    admin,
    aggregator_service,
    attendance_service,
    booking_service,
    client_service,
    dashboard_service,
    portal_service,
    rpc,
    schedule_service,
    studio_service,
    subscription_service,
)

__all__ = [
    "account_service",
    "admin",
    "aggregator_service",
    "attendance_service",
    "booking_service",
    "client_service",
    "dashboard_service",
    "portal_service",
    "rpc",
    "schedule_service",
    "studio_service",
    "subscription_service",
]
