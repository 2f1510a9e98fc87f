import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for the current environment.

    APP_ENV wins over FLASK_ENV; anything unknown falls back to development.
    """
    env = (os.getenv("APP_ENV") or os.getenv("FLASK_ENV") or "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")
