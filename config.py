import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("CONFIG_FILE", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

DEFAULT_JWT_SECRET = "dev-secret-key-change-in-production"


class ConfigurationError(Exception):
    pass


class ApplicationConfig:
    DB_URI = os.environ.get("DB_URI", data.get("DB_URI", "sqlite+aiosqlite:///./auth.db"))
    API_PORT = data.get("API_PORT", 5000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "dev")
    JWT_SECRET = os.environ.get("JWT_SECRET", data.get("JWT_SECRET", DEFAULT_JWT_SECRET))
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 60))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    RESET_REVEALS_UNKNOWN_EMAIL = bool(data.get("RESET_REVEALS_UNKNOWN_EMAIL", False))

    @classmethod
    def validate(cls):
        """Refuse to run production with a missing or development signing secret"""
        if cls.ENVIRONMENT == "production" and cls.JWT_SECRET in ("", DEFAULT_JWT_SECRET):
            raise ConfigurationError("JWT_SECRET must be set in production")
