from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "scheduling"

    def ready(self) -> None:
        from scheduling import signals  # noqa: F401
        from scheduling.container import build_django_services

        self.services = build_django_services()
