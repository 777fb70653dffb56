import pytest

from locale_loader import load_locale_config
from locales import LOCALES
from logger import setup_logger
from pages import LoginPage, SignupPage
from settings import load_settings

VIEWPORT = {"width": 1440, "height": 900}


@pytest.fixture(scope="session")
def suite_settings():
    return load_settings()


@pytest.fixture(scope="session")
def log(suite_settings):
    logger = setup_logger(suite_settings.log_level)
    logger.info(
        "Environment: %s, locale: %s, base URL: %s, env file: %s",
        suite_settings.environment,
        suite_settings.locale,
        suite_settings.base_url,
        suite_settings.env_file,
    )
    return logger


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, suite_settings):
    return {
        **browser_context_args,
        "viewport": VIEWPORT,
        "locale": LOCALES[suite_settings.locale]["playwright_locale"],
    }


@pytest.fixture(scope="session")
def locale_config(suite_settings):
    return load_locale_config(suite_settings.locale, suite_settings.base_url)


@pytest.fixture()
def signup_page(page, locale_config, log):
    signup = SignupPage(page, locale_config)
    signup.goto()
    log.info("Running test in %s locale", locale_config.locale.upper())
    return signup


@pytest.fixture()
def login_page(page):
    return LoginPage(page)
