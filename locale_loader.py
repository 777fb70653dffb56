"""
Locale configuration loading.

Each supported locale keeps three JSON documents under i18n/<locale>/:
signup.json (labels plus a nested "errors" mapping), provinces.json and
urls.json. They are loaded independently and merged into one immutable
LocaleConfig. Anything missing or malformed raises LocaleConfigError; there
is no partially populated config.
"""
import json
import os
import re
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from locales import LOCALES
from provinces import PROVINCE_KEYS

I18N_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "i18n")
URL_RE = re.compile(r"^https?://", re.IGNORECASE)

SECTIONS = ("signup", "provinces", "urls")


class LocaleConfigError(Exception):
    pass


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class SignupErrors:
    first_name_required: str
    last_name_required: str
    phone_number_required: str
    province_required: str
    email_required: str
    password_required: str
    password_length_too_short: str
    password_length_too_long: str
    confirm_password_required: str
    weak_password_error_message: str


@dataclass(frozen=True)
class SignupLabels:
    first_name: str
    last_name: str
    phone_number: str
    province: str
    email: str
    password: str
    confirm_password: str
    submit_button: str
    heading: str
    password_requirement: str
    login_link: str
    terms_of_service: str
    privacy_policy: str
    already_have_account: str
    partner_contact_checkbox: str
    errors: SignupErrors


@dataclass(frozen=True)
class LocaleUrls:
    signup: str
    login: str
    terms_of_service: str
    base_url: str = ""

    @property
    def is_resolved(self) -> bool:
        return bool(self.base_url)


@dataclass(frozen=True)
class LocaleConfig:
    locale: str
    signup: SignupLabels
    provinces: Mapping[str, str]
    urls: LocaleUrls

    def with_base_url(self, base_url: str) -> "LocaleConfig":
        return LocaleConfig(
            locale=self.locale,
            signup=self.signup,
            provinces=self.provinces,
            urls=resolve_urls(self.urls, base_url),
        )


def _string_fields(doc: Dict[str, Any], names: Tuple[str, ...], where: str) -> Dict[str, str]:
    """
    Pull exactly `names` (camelCase) out of `doc`. Missing keys, unknown keys
    and non-string values are all configuration errors.
    """
    missing = [n for n in names if n not in doc]
    unknown = [k for k in doc if k not in names]
    if missing or unknown:
        raise LocaleConfigError(
            f"{where}: missing keys {sorted(missing)}, unknown keys {sorted(unknown)}"
        )
    bad = [n for n in names if not isinstance(doc[n], str)]
    if bad:
        raise LocaleConfigError(f"{where}: values must be strings: {sorted(bad)}")
    return {n: doc[n] for n in names}


def _json_names(cls, exclude: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    return tuple(_camel_case(f.name) for f in fields(cls) if f.name not in exclude)


def _load_document(i18n_dir: str, locale: str, section: str) -> Dict[str, Any]:
    path = os.path.join(i18n_dir, locale, f"{section}.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except OSError as e:
        raise LocaleConfigError(f"Cannot read locale document {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LocaleConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(doc, dict):
        raise LocaleConfigError(f"{path}: expected a JSON object, got {type(doc).__name__}")
    return doc


def parse_signup(doc: Dict[str, Any], where: str = "signup") -> SignupLabels:
    doc = dict(doc)
    errors_doc = doc.pop("errors", None)
    if not isinstance(errors_doc, dict):
        raise LocaleConfigError(f"{where}: 'errors' must be a JSON object")

    labels = _string_fields(doc, _json_names(SignupLabels, exclude=("errors",)), where)
    errors = _string_fields(errors_doc, _json_names(SignupErrors), f"{where}.errors")

    return SignupLabels(
        errors=SignupErrors(**{f.name: errors[_camel_case(f.name)] for f in fields(SignupErrors)}),
        **{
            f.name: labels[_camel_case(f.name)]
            for f in fields(SignupLabels)
            if f.name != "errors"
        },
    )


def parse_provinces(doc: Dict[str, Any], where: str = "provinces") -> Mapping[str, str]:
    return MappingProxyType(_string_fields(doc, PROVINCE_KEYS, where))


def parse_urls(doc: Dict[str, Any], where: str = "urls") -> LocaleUrls:
    urls = _string_fields(doc, _json_names(LocaleUrls, exclude=("base_url",)), where)
    return LocaleUrls(
        signup=urls["signup"],
        login=urls["login"],
        terms_of_service=urls["termsOfService"],
    )


def normalize_base_url(base_url: str) -> str:
    base_url = base_url.strip()
    if not URL_RE.match(base_url):
        raise LocaleConfigError(f"Base URL must start with http:// or https://, got {base_url!r}")
    return base_url[:-1] if base_url.endswith("/") else base_url


def _join(base: str, template: str) -> str:
    if URL_RE.match(template):
        return template
    return f"{base}{template}"


def resolve_urls(urls: LocaleUrls, base_url: str) -> LocaleUrls:
    """
    Resolve route templates against `base_url`.

    Absolute templates (external links such as the terms of service) pass
    through unchanged. Resolving an already resolved LocaleUrls against the
    same base returns it unchanged; a different base is an error, since the
    relative templates are gone at that point.
    """
    base = normalize_base_url(base_url)
    if urls.is_resolved:
        if urls.base_url != base:
            raise LocaleConfigError(
                f"URLs already resolved against {urls.base_url}, cannot re-resolve against {base}"
            )
        return urls

    return LocaleUrls(
        signup=_join(base, urls.signup),
        login=_join(base, urls.login),
        terms_of_service=_join(base, urls.terms_of_service),
        base_url=base,
    )


def load_locale_config(
    locale: str,
    base_url: Optional[str] = None,
    i18n_dir: str = I18N_DIR,
) -> LocaleConfig:
    """
    Load and merge the signup, provinces and urls documents for `locale`.

    Without a base URL the URL section stays relative (urls.base_url == "").
    """
    if locale not in LOCALES:
        raise LocaleConfigError(f"Unsupported locale {locale!r}; expected one of {sorted(LOCALES)}")

    docs = {section: _load_document(i18n_dir, locale, section) for section in SECTIONS}

    config = LocaleConfig(
        locale=locale,
        signup=parse_signup(docs["signup"], where=f"{locale}/signup.json"),
        provinces=parse_provinces(docs["provinces"], where=f"{locale}/provinces.json"),
        urls=parse_urls(docs["urls"], where=f"{locale}/urls.json"),
    )

    if base_url:
        config = config.with_base_url(base_url)
    return config
