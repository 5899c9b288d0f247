"""Django app configuration for Rollman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RollmanConfig(AppConfig):
    """Configuration for Rollman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "rollman"
    verbose_name = _("Roll Stock")
