from django.apps import AppConfig


class DraftableConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "draftable"
    verbose_name = "Draftable"
