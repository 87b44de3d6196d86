from django.apps import AppConfig


class IdentifiersConfig(AppConfig):
    name = "src.identifiers"
    label = "identifiers"
    default_auto_field = "django.db.models.BigAutoField"
