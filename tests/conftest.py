"""Shared fixtures for all tests."""

import random
import shutil

import pytest

from locale_loader import I18N_DIR, load_locale_config


@pytest.fixture()
def en_config():
    return load_locale_config("en")


@pytest.fixture()
def fr_config():
    return load_locale_config("fr")


@pytest.fixture(params=["en", "fr"])
def any_locale_config(request):
    return load_locale_config(request.param)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def i18n_copy(tmp_path):
    """A writable copy of the i18n documents for corrupting in tests."""
    target = tmp_path / "i18n"
    shutil.copytree(I18N_DIR, target)
    return target
