import os

from .config import MEAL_VOUCHER_CURRENCY, MEAL_VOUCHER_DAILY_RATE, db_config_from_env, env_flag

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345", default_database="staff_calendar_test")

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
# No request log file under tests
LOG_FILE = None

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
