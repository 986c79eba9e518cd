from datetime import date

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from api.models import DiaryEntry
from helpers import token_header


@pytest.fixture(autouse=True)
def fast_hashers(settings):
    # PBKDF2 est lent; le hasher sha256 reste dispo pour les comptes hérités
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
        "api.hashers.SHA256PasswordHasher",
    ]


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make(username, password="pw"):
        return get_user_model().objects.create_user(username=username, password=password)
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def alice_auth(alice):
    return token_header(alice)


@pytest.fixture
def bob_auth(bob):
    return token_header(bob)


@pytest.fixture
def make_entry(alice):
    def _make(entry_id="e1", owner=None, **fields):
        values = {"title": "T", "content": "C", "date": date(2024, 1, 1), "mood": "😊"}
        values.update(fields)
        return DiaryEntry.objects.create(id=entry_id, owner=owner or alice, **values)
    return _make
