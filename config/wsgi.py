"""
WSGI entry point for the identifier keys service.

DJANGO_ENV selects the settings module (production | test | development).
"""

from config.django import configure_settings_module

configure_settings_module()

from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
