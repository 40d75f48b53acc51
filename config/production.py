import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "hr_compliance"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_compliance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SETTINGS_SOURCE = os.getenv("SETTINGS_SOURCE", "database")
LATE_PENALTY_RATE_PER_MINUTE = os.getenv("LATE_PENALTY_RATE_PER_MINUTE")
SP1_WEEKLY_LATE_MINUTES = int(os.getenv("SP1_WEEKLY_LATE_MINUTES", "30"))
SP1_MONTHLY_LATE_COUNT = int(os.getenv("SP1_MONTHLY_LATE_COUNT", "5"))
ANNUAL_LEAVE_QUOTA = int(os.getenv("ANNUAL_LEAVE_QUOTA", "12"))
