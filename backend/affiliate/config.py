import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", os.getenv("SECRET_KEY", "dev-secret"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tenant routing
    DOMAIN_MAPPINGS = None
    DOMAIN_MAPPINGS_FILE = os.getenv("DOMAIN_MAPPINGS_FILE", "domain-mappings.json")
    DEFAULT_SITE_SLUG = os.getenv("DEFAULT_SITE_SLUG", "demo-gaming")
    SITE_OVERRIDE_PARAM = "site"

    # Rendering
    PAGE_FETCH_WORKERS = int(os.getenv("PAGE_FETCH_WORKERS", "4"))
    ENABLE_AUTO_LINK = _env_bool("ENABLE_AUTO_LINK", True)
    PRODUCTS_PER_PAGE = int(os.getenv("PRODUCTS_PER_PAGE", "12"))
    ARTICLES_PER_PAGE = int(os.getenv("ARTICLES_PER_PAGE", "12"))

    # Media
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///affiliate-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite://")
    DOMAIN_MAPPINGS = {}
    DOMAIN_MAPPINGS_FILE = None
    PAGE_FETCH_WORKERS = 1
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
