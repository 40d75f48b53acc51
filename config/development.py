import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_compliance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# "static" reads the values below; "database" reads the system_settings table
SETTINGS_SOURCE = os.getenv("SETTINGS_SOURCE", "static")
LATE_PENALTY_RATE_PER_MINUTE = os.getenv("LATE_PENALTY_RATE_PER_MINUTE", "1000")
SP1_WEEKLY_LATE_MINUTES = int(os.getenv("SP1_WEEKLY_LATE_MINUTES", "30"))
SP1_MONTHLY_LATE_COUNT = int(os.getenv("SP1_MONTHLY_LATE_COUNT", "5"))
ANNUAL_LEAVE_QUOTA = int(os.getenv("ANNUAL_LEAVE_QUOTA", "12"))
