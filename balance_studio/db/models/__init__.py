from .client import Client, ClientStatus
from .profile import Profile
from .instructor import Instructor, InstructorStatus
from .scheduled_class import ScheduledClass
from .subscription import Subscription, SubscriptionStatus
from .subscription_plan import SubscriptionPlan
from .user_subscription import UserSubscription
from .attendance import AttendanceRecord, AttendanceStatus
from .aggregator_visit import AggregatorVisit
from .news import NewsItem
from .studio_info import StudioInfo, STUDIO_INFO_ID
from .app_admin import AppAdmin
from .personal_request import PersonalRequest, PersonalRequestStatus
