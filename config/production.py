import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "academy_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PERIOD_DAYS_MIN = int(os.getenv("PERIOD_DAYS_MIN", "1"))
PERIOD_DAYS_MAX = int(os.getenv("PERIOD_DAYS_MAX", "365"))
PERIOD_DAYS_DEFAULT = int(os.getenv("PERIOD_DAYS_DEFAULT", "30"))
ALLOWED_ABSENCES = int(os.getenv("ALLOWED_ABSENCES", "2"))
