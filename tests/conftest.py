"""
Pytest configuration for seedbed tests.
"""

import os

import django
import pytest


def pytest_configure():
    """Configure Django settings before tests run."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "seedbed.settings_test")
    django.setup()


@pytest.fixture(autouse=True)
def clean_fixture_tags():
    """Tagged classes and deprecation bookkeeping are process-wide; reset them."""
    from seedbed.fixtures import loader, tagging

    tagging.clear_tags()
    loader._context_aware_warned.clear()
    yield
    tagging.clear_tags()
    loader._context_aware_warned.clear()
