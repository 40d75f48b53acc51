import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_compliance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SETTINGS_SOURCE = "static"
LATE_PENALTY_RATE_PER_MINUTE = "1000"
SP1_WEEKLY_LATE_MINUTES = 30
SP1_MONTHLY_LATE_COUNT = 5
ANNUAL_LEAVE_QUOTA = 12
