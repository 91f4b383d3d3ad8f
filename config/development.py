import os

from .config import LOG_FILE, MEAL_VOUCHER_CURRENCY, MEAL_VOUCHER_DAILY_RATE, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="root")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo users/projects on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
