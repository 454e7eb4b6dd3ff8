"""
Django app configuration for seedbed fixture loading.
"""

from django.apps import AppConfig


class FixturesConfig(AppConfig):
    """Configuration for the seed fixtures app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "seedbed.fixtures"
    label = "seedbed_fixtures"
    verbose_name = "Seed Fixtures"
