# Session keys
SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"
SESSION_IS_ADMIN = "is_admin"
SESSION_TOKEN = "token"
SESSION_PROJECTION_PREFIX = "bracket_projection:"

# Roles
ROLE_ADMIN = "admin"

# Tournament statuses
TOURNAMENT_UPCOMING = "upcoming"
TOURNAMENT_OPEN = "open"
TOURNAMENT_IN_PROGRESS = "in-progress"
TOURNAMENT_COMPLETE = "complete"

STATUS_LABELS = {
    TOURNAMENT_UPCOMING: "Upcoming",
    TOURNAMENT_OPEN: "Registration open",
    TOURNAMENT_IN_PROGRESS: "In progress",
    TOURNAMENT_COMPLETE: "Complete",
}

# Currency shown next to prize amounts
CURRENCY = "FCFA"
