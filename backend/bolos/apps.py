from django.apps import AppConfig


class BolosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "bolos"
    verbose_name = "BOLO Registry"
