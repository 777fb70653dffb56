"""
Harness-side settings: which environment, locale and base URL a run targets.

Resolution order for the environment name is ENV, then the ENV_FILE name
(".env.<name>"), then the default. The matching environments/.env.<name>
file is read with python-dotenv; variables already present in the process
environment take precedence over the file.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import dotenv_values

from locales import DEFAULT_ENVIRONMENT, DEFAULT_LOCALE, ENVIRONMENTS, LOCALES

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
ENVIRONMENTS_DIR = os.path.join(ROOT_DIR, "environments")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SettingsError(Exception):
    pass


@dataclass(frozen=True)
class SuiteSettings:
    environment: str
    locale: str
    base_url: str
    env_file: Optional[str] = None
    log_level: str = "INFO"


def _env_name_from_file(env_file: str) -> str:
    name = os.path.basename(env_file)
    return name[len(".env."):] if name.startswith(".env.") else ""


def default_base_url(environment: str) -> str:
    return ENVIRONMENTS[environment]["base_url"]


def load_settings(environ: Optional[Mapping[str, str]] = None, root: str = ROOT_DIR) -> SuiteSettings:
    environ = dict(os.environ if environ is None else environ)

    explicit_file = environ.get("ENV_FILE")
    environment = (
        environ.get("ENV")
        or (_env_name_from_file(explicit_file) if explicit_file else "")
        or DEFAULT_ENVIRONMENT
    ).lower()
    if environment not in ENVIRONMENTS:
        raise SettingsError(f"Unknown environment {environment!r}; expected one of {sorted(ENVIRONMENTS)}")

    env_file = explicit_file or os.path.join("environments", f".env.{environment}")
    env_path = env_file if os.path.isabs(env_file) else os.path.join(root, env_file)

    file_values = {}
    if os.path.exists(env_path):
        file_values = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
    elif explicit_file:
        raise SettingsError(f"ENV_FILE {explicit_file} does not exist")
    else:
        env_path = None

    values = {**file_values, **environ}

    locale = (values.get("LOCALE") or DEFAULT_LOCALE).lower()
    if locale not in LOCALES:
        raise SettingsError(f"Unsupported LOCALE {locale!r}; expected one of {sorted(LOCALES)}")

    base_url = values.get("BASE_URL") or default_base_url(environment)

    log_level = (values.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise SettingsError(f"Unsupported LOG_LEVEL {log_level!r}; expected one of {list(LOG_LEVELS)}")

    return SuiteSettings(
        environment=environment,
        locale=locale,
        base_url=base_url,
        env_file=env_path,
        log_level=log_level,
    )
