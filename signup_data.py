"""
Signup form test data: random records, password/email rules.

Every generator takes an optional random.Random so a test can pass a seeded
instance and get reproducible data.
"""
import random
import re
import string
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from faker import Faker

from provinces import get_localized_province

PASSWORD_LENGTH = 12
PASSWORD_MIN_LENGTH = 12
PASSWORD_MAX_LENGTH = 32

DEFAULT_PROVINCE = "ONTARIO"

CANADIAN_AREA_CODES = ["416", "647", "437", "514", "438", "450", "613", "819", "905", "289", "365"]

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

T = TypeVar("T")

_rng = random.Random()
_fake = Faker("en_CA")


@dataclass(frozen=True)
class SignupFormData:
    first_name: str
    last_name: str
    phone_number: str
    province: str
    email: str
    password: str
    confirm_password: str
    partner_contact: bool = False


@dataclass(frozen=True)
class PasswordIssue:
    kind: str
    detail: str


def get_random_value(items: Sequence[T], rng: Optional[random.Random] = None) -> T:
    if len(items) == 0:
        raise ValueError("Cannot get random value from an empty sequence")
    rng = rng or _rng
    return items[rng.randrange(len(items))]


def generate_valid_password(rng: Optional[random.Random] = None) -> str:
    """
    12 characters with at least one uppercase letter, one lowercase letter
    and one digit, in shuffled order.
    """
    rng = rng or _rng
    chars = [
        get_random_value(string.ascii_uppercase, rng),
        get_random_value(string.ascii_lowercase, rng),
        get_random_value(string.digits, rng),
    ]
    pool = string.ascii_letters + string.digits
    chars += [get_random_value(pool, rng) for _ in range(PASSWORD_LENGTH - len(chars))]
    rng.shuffle(chars)
    return "".join(chars)


def check_password(password: str) -> List[PasswordIssue]:
    """Return every rule the password breaks (empty list when valid)."""
    issues: List[PasswordIssue] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        issues.append(PasswordIssue("min_length", f"Password must be at least {PASSWORD_MIN_LENGTH} characters"))
    if len(password) > PASSWORD_MAX_LENGTH:
        issues.append(PasswordIssue("max_length", f"Password must be at most {PASSWORD_MAX_LENGTH} characters"))
    if not re.search(r"[A-Z]", password):
        issues.append(PasswordIssue("missing_uppercase", "Password must contain at least one uppercase letter"))
    if not re.search(r"[a-z]", password):
        issues.append(PasswordIssue("missing_lowercase", "Password must contain at least one lowercase letter"))
    if not re.search(r"[0-9]", password):
        issues.append(PasswordIssue("missing_digit", "Password must contain at least one number"))
    return issues


def is_valid_password(password: str) -> bool:
    return not check_password(password)


def is_valid_email(email: str) -> bool:
    # Loose syntax check for fixtures, not RFC 5322.
    if not EMAIL_RE.match(email) or ".." in email:
        return False
    domain = email.split("@", 1)[1]
    return all(domain.split("."))


def generate_phone_number(rng: Optional[random.Random] = None) -> str:
    rng = rng or _rng
    return "".join(get_random_value(string.digits, rng) for _ in range(10))


def generate_canadian_phone_number(rng: Optional[random.Random] = None) -> str:
    rng = rng or _rng
    return f"{get_random_value(CANADIAN_AREA_CODES, rng)}{rng.randint(1000000, 9999999)}"


def generate_unique_email(rng: Optional[random.Random] = None) -> str:
    rng = rng or _rng
    return f"testuser{int(time.time() * 1000)}{rng.randrange(10000)}@example.com"


def _faker_for(rng: Optional[random.Random]) -> Faker:
    if rng is None:
        return _fake
    fake = Faker("en_CA")
    fake.seed_instance(rng.getrandbits(32))
    return fake


def create_test_user(
    locale_config,
    overrides: Optional[Dict[str, Any]] = None,
    rng: Optional[random.Random] = None,
    fake: Optional[Faker] = None,
) -> SignupFormData:
    """
    Build a valid signup record, then apply `overrides` field by field.

    Defaults: Faker first/last name and email, a 10-digit phone number,
    Ontario's display name for the config's locale, one generated password
    for both password fields and no partner contact. Unknown override
    fields raise TypeError.
    """
    fake = fake or _faker_for(rng)
    rng = rng or _rng
    password = generate_valid_password(rng)

    data = SignupFormData(
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        phone_number=generate_phone_number(rng),
        province=get_localized_province(DEFAULT_PROVINCE, locale_config).name,
        email=fake.email(),
        password=password,
        confirm_password=password,
        partner_contact=False,
    )
    if overrides:
        data = replace(data, **overrides)
    return data
