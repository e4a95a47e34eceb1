from .account import (
    Account,
    ClientAccount,
    ClientProfile,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    Role,
    TrainerAccount,
    TrainerProfile,
)
from .activity import (
    MetricCreate,
    MetricListResponse,
    MetricResponse,
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutResponse,
)
from .common import EchoResponse, MessageResponse, SuccessResponse
from .plan import PlanCreate, PlanListResponse, PlanResponse, PlanUpdate
