"""Common application-wide constants."""

# Defaults of the admin forms
DEFAULT_CLIENT_SOURCE = "Администратор"
DEFAULT_ROOM = "Большой зал"
DEFAULT_CLASS_DURATION_MIN = 60
DEFAULT_CLASS_CAPACITY = 10
DEFAULT_SUBSCRIPTION_SESSIONS = 12
DEFAULT_SUBSCRIPTION_DAYS = 30

# Subscriptions with fewer sessions left are highlighted in the admin list
LOW_BALANCE_THRESHOLD = 3

# Trial lessons
TRIAL_SOURCE = "Пробное"
TRIAL_SUBSCRIPTION_TYPE = "Пробное занятие"
TRIAL_TYPE_MARKER = "Пробное"
TRIAL_DEFAULT_PRICE = 2000
TRIAL_LIST_LIMIT = 50

# Aggregator partners
DEFAULT_AGGREGATOR = "1Fit"
DEFAULT_AGGREGATOR_REVENUE = 2000

# Attendance screens
RECENT_ATTENDANCE_LIMIT = 30
CLIENT_SEARCH_LIMIT = 5
CLIENT_SEARCH_MIN_LENGTH = 2
ATTENDANCE_PIN_HEADER = "X-Attendance-Pin"

# Client portal
PORTAL_SCHEDULE_DAYS = 7
MIN_PHONE_DIGITS = 10
MIN_PASSWORD_LENGTH = 6
PERSONAL_REQUEST_NOTE_SEPARATOR = " | Комментарий: "

DEFAULT_STUDIO_NAME = "Balance Yoga Studio"



__all__ = [
    "DEFAULT_CLIENT_SOURCE",
    "DEFAULT_ROOM",
    "DEFAULT_CLASS_DURATION_MIN",
    "DEFAULT_CLASS_CAPACITY",
    "DEFAULT_SUBSCRIPTION_SESSIONS",
    "DEFAULT_SUBSCRIPTION_DAYS",
    "LOW_BALANCE_THRESHOLD",
    "TRIAL_SOURCE",
    "TRIAL_SUBSCRIPTION_TYPE",
    "TRIAL_TYPE_MARKER",
    "TRIAL_DEFAULT_PRICE",
    "TRIAL_LIST_LIMIT",
    "DEFAULT_AGGREGATOR",
    "DEFAULT_AGGREGATOR_REVENUE",
    "RECENT_ATTENDANCE_LIMIT",
    "CLIENT_SEARCH_LIMIT",
    "CLIENT_SEARCH_MIN_LENGTH",
    "ATTENDANCE_PIN_HEADER",
    "PORTAL_SCHEDULE_DAYS",
    "MIN_PHONE_DIGITS",
    "MIN_PASSWORD_LENGTH",
    "PERSONAL_REQUEST_NOTE_SEPARATOR",
    "DEFAULT_STUDIO_NAME",
]
