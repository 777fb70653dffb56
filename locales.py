# locales.py

LOCALES = {
    "en": {
        "label": "Canada (English)",
        "playwright_locale": "en-CA",
        "signup_path_marker": "/signup",
        "terms_slug": "terms-of-services",
    },
    "fr": {
        "label": "Canada (Français)",
        "playwright_locale": "fr-CA",
        "signup_path_marker": "/fr/signup",
        "terms_slug": "conditions-d-utilisation",
    },
}

DEFAULT_LOCALE = "en"

ENVIRONMENTS = {
    "dev": {
        "label": "Development",
        "base_url": "https://app.dev.nesto.ca",
    },
    "qa": {
        "label": "QA",
        "base_url": "https://app.qa.nesto.ca",
    },
    "staging": {
        "label": "Staging",
        "base_url": "https://app.staging.nesto.ca",
    },
}

DEFAULT_ENVIRONMENT = "qa"


def other_locale(locale: str) -> str:
    return "fr" if locale == "en" else "en"
