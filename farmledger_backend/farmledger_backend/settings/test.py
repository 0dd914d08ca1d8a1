# farmledger_backend/settings/test.py

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

TWO_FACTOR_API_KEY = 'test-api-key'
TWO_FACTOR_BASE_URL = 'https://2factor.test/API/V1'

LOGGING['loggers']['apps']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['core']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['integrations']['level'] = 'CRITICAL'  # noqa: F405
