"""Global constants for routing, security rules and identifiers."""

API_PREFIX = "/api"
STATIC_PREFIX = "/static"

PEOPLE_PATH = API_PREFIX + "/people"
TASKS_PATH = API_PREFIX + "/tasks"

TASK_ID_PREFIX = "task-"

BEARER_SCHEME = "Bearer"

SUPPORTED_JWT_ALGORITHMS = {"HS256", "HS384", "HS512"}

NOISY_LOGGERS = ["httpx", "httpcore"]

# Java-compatible 32 bit string hash bounds
INT32_MIN = -(2 ** 31)
UINT32_MASK = 0xFFFFFFFF
