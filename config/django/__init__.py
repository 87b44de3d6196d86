import os

SETTINGS_BY_ENV = {
    "production": "config.django.production",
    "test": "config.django.test",
}


def configure_settings_module() -> str:
    """Pick the settings module from DJANGO_ENV unless one is already set."""
    env = os.environ.get("DJANGO_ENV", "development")
    return os.environ.setdefault(
        "DJANGO_SETTINGS_MODULE", SETTINGS_BY_ENV.get(env, "config.django.base")
    )
