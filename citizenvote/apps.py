from django.apps import AppConfig


class CitizenvoteConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "citizenvote"
    verbose_name = "CitizenVote"
