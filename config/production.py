import os

from config.config import cors_origins_from_env, sheets_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SHEETS_CONFIG = sheets_config_from_env()

CORS_ORIGINS = cors_origins_from_env()

PORT = int(os.getenv("PORT", "3000"))

DEBUG = False
