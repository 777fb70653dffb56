"""
Canadian provinces and territories.

Codes are stable across locales; display names come from the active
LocaleConfig's province section.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional

PROVINCE_CODES: Mapping[str, str] = MappingProxyType({
    "ONTARIO": "ON",
    "QUEBEC": "QC",
    "ALBERTA": "AB",
    "BRITISH_COLUMBIA": "BC",
    "MANITOBA": "MB",
    "NEW_BRUNSWICK": "NB",
    "NOVA_SCOTIA": "NS",
    "NEWFOUNDLAND": "NL",
    "PRINCE_EDWARD_ISLAND": "PE",
    "SASKATCHEWAN": "SK",
    "NORTHWEST_TERRITORIES": "NT",
    "YUKON": "YT",
    "NUNAVUT": "NU",
})

PROVINCE_KEYS = tuple(PROVINCE_CODES)


@dataclass(frozen=True)
class LocalizedProvince:
    key: str
    name: str
    code: str


def get_province_code(province_key: str) -> str:
    return PROVINCE_CODES[province_key]


def get_localized_province(province_key: str, locale_config) -> LocalizedProvince:
    """
    Combine a province key with its display name for the given locale.
    Raises KeyError for keys outside the catalog.
    """
    return LocalizedProvince(
        key=province_key,
        name=locale_config.provinces[province_key],
        code=PROVINCE_CODES[province_key],
    )


def get_all_localized_provinces(locale_config) -> List[LocalizedProvince]:
    return [get_localized_province(key, locale_config) for key in PROVINCE_KEYS]


def get_province_code_from_name(province_name: str, locale_config) -> Optional[str]:
    """
    Map a localized display name (as read back from the UI) to its code.
    Returns None when the name is not one of this locale's province names.
    """
    for province in get_all_localized_provinces(locale_config):
        if province.name == province_name:
            return province.code
    return None
