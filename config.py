import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration class"""

    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    DEBUG = os.getenv("DEBUG", "True") == "True"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Service identity reported by /api/health
    SERVICE_NAME = "Cybersecurity Interview API"
    SERVICE_VERSION = "1.0.0"

    # Evaluation call settings
    EVALUATION_TEMPERATURE = 0.3  # Lower temperature for more consistent evaluations
    EVALUATION_TIMEOUT = 30.0  # Whole-request budget in seconds
    EVALUATION_MAX_TOKENS = 1000


class DevelopmentConfig(Config):
    """Development environment configuration"""

    DEBUG = True


class ProductionConfig(Config):
    """Production environment configuration"""

    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


class TestingConfig(Config):
    """Testing environment configuration"""

    TESTING = True
    DEBUG = True


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
