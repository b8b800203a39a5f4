from motivatr.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from motivatr.schemas.user import SignupRequest, LoginRequest, UserResponse, AuthResponse
from motivatr.schemas.streak import StreakDataSchema, StreakSyncResponse
from motivatr.schemas.profile import TaskStats, AchievementStatus, ProfileResponse
