"""Country toggle definitions shown in the viewer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountryDefinition:
    """A country the catalog can be filtered by."""

    code: str
    name: str


COUNTRIES: tuple[CountryDefinition, ...] = (
    CountryDefinition(code="US", name="アメリカ"),
    CountryDefinition(code="NL", name="オランダ"),
    CountryDefinition(code="CH", name="スイス"),
    CountryDefinition(code="DE", name="ドイツ"),
    CountryDefinition(code="FI", name="フィンランド"),
    CountryDefinition(code="FR", name="フランス"),
    CountryDefinition(code="GB", name="英国"),
)

COUNTRY_CODES: tuple[str, ...] = tuple(country.code for country in COUNTRIES)
COUNTRY_NAMES: dict[str, str] = {country.code: country.name for country in COUNTRIES}


def country_display_name(code: str) -> str:
    """Return the display name for ``code``, or the raw code when unknown."""

    return COUNTRY_NAMES.get(code, code)
