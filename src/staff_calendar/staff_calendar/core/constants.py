"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

REMOTE_WORK_WEEKLY_QUOTA = 2
PAID_LEAVE_SELF_CANCEL_NOTICE_DAYS = 7
DEFAULT_MEAL_VOUCHER_DAILY_RATE = 8
DEFAULT_MEAL_VOUCHER_CURRENCY = "EUR"
PROJECT_NAME_MIN_LENGTH = 3
