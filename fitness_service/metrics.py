from prometheus_client import Counter

ACCOUNTS_REGISTERED_TOTAL = Counter(
    "accounts_registered_total",
    "Number of accounts registered via fitness-service",
    ["role"],  # client | trainer
)

LOGIN_ATTEMPTS_TOTAL = Counter(
    "login_attempts_total",
    "Number of login attempts handled by fitness-service",
    ["outcome"],  # success | invalid | error
)

WORKOUTS_LOGGED_TOTAL = Counter(
    "workouts_logged_total",
    "Number of workouts logged via fitness-service",
)

BODY_METRICS_RECORDED_TOTAL = Counter(
    "body_metrics_recorded_total",
    "Number of body metric snapshots stored via fitness-service",
)

PLAN_CHANGES_TOTAL = Counter(
    "plan_changes_total",
    "Number of trainer plan changes via fitness-service",
    ["action"],  # assigned | updated | deleted
)
