import os

db_url = os.environ.get("DB_URL", "sqlite://:memory:")
REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")

# development | production | test
ENV = os.environ.get("ENV", "development")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if ENV == "development" else "INFO")

SESSION_COOKIE = os.environ.get("SESSION_COOKIE", "venbook_session")
SESSION_TTL = int(os.environ.get("SESSION_TTL", str(60 * 60 * 24 * 7)))  # 7 days

MODEL_MODULES = ["app.models"]
