"""Pytest configuration and shared fixtures."""

import itertools

import pytest
from rest_framework.test import APIClient

_national_ids = itertools.count(30_000_001)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_db_person(db):
    """Create persisted people with unique national ids."""
    from civic_events.models import Person

    def _make(first_name: str = "Ana", last_name: str = "Pereyra") -> Person:
        return Person.objects.create(
            first_name=first_name,
            last_name=last_name,
            national_id=str(next(_national_ids)),
        )

    return _make
