from django.apps import AppConfig


class ResellersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.resellers"
    label = "resellers"
