# petcare/core/config.py

import os
from datetime import timedelta


class Config:
    """Base settings shared by every environment."""
    # Signing key for bearer tokens. Production refuses to start without it.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET', 'dev-secret-change-this-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['headers']

    # Document store (Firestore). Without a credentials file the application
    # default credentials are used together with FIREBASE_PROJECT_ID.
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')

    DEFAULT_VETERINARIAN = os.getenv('DEFAULT_VETERINARIAN', 'Dr. Smith')

    # Defaults for `flask seed-admin`
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@petcare.com')
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = 'test-secret-key-with-enough-length-for-hs256'


class ProductionConfig(Config):
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET')


# create_app picks the class matching FLASK_ENV (or the name passed in).
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
