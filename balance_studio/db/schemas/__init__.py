from .client import (
    Client,
    ClientCreate,
    ClientUpdate,
    ClientSelfUpdate,
    ClientStatusUpdate,
    ClientShort,
)
from .profile import Profile, PlanIssue, UserSubscription
from .instructor import Instructor, InstructorCreate, InstructorUpdate
from .scheduled_class import (
    ClassForm,
    ClassOccupancy,
    ScheduledClass,
    WeekSchedule,
    DuplicateWeekResult,
)
from .subscription import Subscription, SubscriptionForm, Trial, TrialCreate
from .plan import Plan, PlanCreate, PlanUpdate
from .attendance import AttendanceRecord, CheckIn, PinCheck
from .aggregator import (
    AggregatorVisit,
    AggregatorVisitCreate,
    AggregatorVisitList,
    AggregatorMonthSummary,
)
from .news import News, NewsCreate, NewsToggle
from .studio import StudioInfo
from .dashboard import Dashboard, DashboardStats
from .portal import (
    PortalHome,
    PortalClass,
    PortalSchedule,
    BookingRequest,
    MyBooking,
    PersonalRequest,
    PersonalRequestCreate,
)
from .auth import (
    AdminLogin,
    AdminSession,
    PortalCredentials,
    PortalRegistration,
    RefreshRequest,
    PasswordResetRequest,
    SessionUser,
    TokenResponse,
)
