import os

from dotenv import load_dotenv


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def load_env():
    """Load `.env` from the project root into the environment, if present.

    Variables already set in the process environment win over the file.
    """
    dotenv_path = os.path.join(PROJECT_ROOT, ".env")
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path, override=False)


def get_settings():
    load_env()
    return {
        "environment": os.getenv("ENVIRONMENT", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "api_prefix": os.getenv("API_PREFIX", "/api/v1"),
    }
