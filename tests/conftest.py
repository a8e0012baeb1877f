from __future__ import annotations

import pytest

from api.services.application_store import application_store
from api.services.preference_store import preference_store
from core.settings import get_settings


@pytest.fixture(autouse=True)
def clean_stores():
    application_store.reset()
    preference_store.reset()
    get_settings.cache_clear()
    yield
    application_store.reset()
    preference_store.reset()
    get_settings.cache_clear()
