"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

WORK_START = "08:00"
WORK_END = "16:00"
SATURDAY_WORK_END = "15:00"

LATE_TOLERANCE_MINUTES = 5

DEFAULT_LATE_PENALTY_PER_MINUTE = Decimal("1000")
DEFAULT_SP1_WEEKLY_LATE_MINUTES = 30
DEFAULT_SP1_MONTHLY_LATE_COUNT = 5
DEFAULT_ANNUAL_LEAVE_QUOTA = 12

SP1 = "SP1"
