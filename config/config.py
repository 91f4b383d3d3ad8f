import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "", default_database: str = "staff_calendar_db") -> dict:
    """mysql-connector connection dict built from DB_* variables."""
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", default_database),
    }


# Meal vouchers: amount granted per worked day
MEAL_VOUCHER_DAILY_RATE = int(os.getenv("MEAL_VOUCHER_DAILY_RATE", "8"))
MEAL_VOUCHER_CURRENCY = os.getenv("MEAL_VOUCHER_CURRENCY", "EUR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs.txt")
