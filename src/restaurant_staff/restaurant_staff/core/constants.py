"""Business constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

LATE_THRESHOLD_MINUTES = 15
EARLY_LEAVE_THRESHOLD_MINUTES = 30
HALF_DAY_MAX_HOURS = 4
OVERTIME_STATUS_MIN_HOURS = 0.5
HOURLY_OVERTIME_MULTIPLIER = 1.5

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(18, 0)
DEFAULT_BREAK_MINUTES = 60
DEFAULT_WEEKLY_OFFS = ("sunday",)

# casual / sick / annual / emergency days per calendar year
DEFAULT_LEAVE_ALLOWANCES = {
    "casual": 12,
    "sick": 12,
    "annual": 21,
    "emergency": 3,
}
# Leave types that always need a manager's approval, whatever the duration.
APPROVAL_REQUIRED_LEAVE_TYPES = frozenset({"annual", "casual"})

EMPLOYEE_CODE_PREFIX = "EMP"
EMPLOYEE_CODE_DIGITS = 4

DEFAULT_PAGE_SIZE = 20
MIN_REVIEW_RATING = 1
MAX_REVIEW_RATING = 5
