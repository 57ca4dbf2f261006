import os


class BaseConfig:
    JSON_SORT_KEYS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    STORE_DB_PATH = os.getenv("STORE_DB_PATH", "store.db")
    STORE_DB_ECHO = os.getenv("STORE_DB_ECHO", "false").lower() in ("1", "true", "yes")
    METRICS_ENABLED = os.getenv("METRICS_ENABLED", "true").lower() in ("1", "true", "yes")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    STORE_DB_PATH = os.getenv("TEST_STORE_DB_PATH", ":memory:")


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    STORE_DB_PATH = os.getenv("STORE_DB_PATH")

    @staticmethod
    def validate():
        missing = []
        if not os.getenv("SECRET_KEY"):
            missing.append("SECRET_KEY")
        if not os.getenv("STORE_DB_PATH"):
            missing.append("STORE_DB_PATH")
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )


def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
