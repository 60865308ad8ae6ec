from __future__ import annotations

import copy
import unicodedata
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from src.transforms.region_translations import translate_region
from src.utils.logging import get_logger


logger = get_logger(component="transforms_countries")

T = TypeVar("T")

REGIONAL_INDICATOR_A = 0x1F1E6
NO_COUNTRY_FLAG = "\U0001F3F3\uFE0F"


# ----- REST Countries (v3.1) input -----


class NameIn(BaseModel):
    common: str | None = None
    official: str | None = None


class TranslationsIn(BaseModel):
    # REST Countries ships ~25 languages keyed by ISO 639-3; only these four are mapped.
    deu: NameIn | None = None
    fra: NameIn | None = None
    ita: NameIn | None = None
    spa: NameIn | None = None


class IddIn(BaseModel):
    root: str | None = None
    suffixes: list[str] | None = None


class CountryIn(BaseModel):
    cca2: str | None = None
    flag: str | None = None
    name: NameIn | None = None
    translations: TranslationsIn | None = None
    region: str | None = None
    subregion: str | None = None
    continents: list[str] | None = None
    idd: IddIn | None = None


# ----- Output (camelCase on the wire) -----


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LocalizedNames(_CamelModel):
    german: str = ""
    english: str = ""
    french: str = ""
    italian: str = ""
    spanish: str = ""


class CountryRegions(_CamelModel):
    continent: LocalizedNames
    region: LocalizedNames
    sub_region: LocalizedNames


class CountryOut(_CamelModel):
    code: str
    flag: str
    phone_code: str
    names: LocalizedNames
    regions: CountryRegions


# ----- helpers -----


def first_or(values: Sequence[T] | None, default: T) -> T:
    if not values:
        return default
    return values[0]


def has_code(country: CountryIn) -> bool:
    return bool(country.cca2)


def english_name(country: CountryIn) -> str:
    if country.name is None or country.name.common is None:
        return ""
    return country.name.common


def resolve_translation(translation: str | None, english: str | None) -> str:
    """Blank or missing translations fall back to English (then to "")."""
    if translation is not None and translation.strip():
        return translation
    return english or ""


def phone_code(idd: IddIn | None) -> str:
    """
    International dialing code: root + first suffix.

    REST Countries splits e.g. Germany into root "+4" and suffixes ["9"].
    """
    if idd is None or idd.root is None:
        return ""
    return idd.root + first_or(idd.suffixes, "")


def flag_from_code(code: str | None) -> str:
    if not code or len(code) != 2 or not (code.isascii() and code.isalpha()):
        return NO_COUNTRY_FLAG
    return "".join(chr(REGIONAL_INDICATOR_A + ord(c) - ord("A")) for c in code.upper())


def localize_region(english: str) -> LocalizedNames:
    return LocalizedNames(
        german=translate_region(english, "german"),
        english=english,
        french=translate_region(english, "french"),
        italian=translate_region(english, "italian"),
        spanish=translate_region(english, "spanish"),
    )


def _translated_common(translations: TranslationsIn | None, lang: str) -> str | None:
    if translations is None:
        return None
    name = getattr(translations, lang)
    if name is None:
        return None
    return name.common


def transform_country(country: CountryIn) -> CountryOut:
    english = english_name(country)
    tr = country.translations

    return CountryOut(
        code=country.cca2 or "",
        flag=country.flag or flag_from_code(country.cca2),
        phone_code=phone_code(country.idd),
        names=LocalizedNames(
            german=resolve_translation(_translated_common(tr, "deu"), english),
            english=english,
            french=resolve_translation(_translated_common(tr, "fra"), english),
            italian=resolve_translation(_translated_common(tr, "ita"), english),
            spanish=resolve_translation(_translated_common(tr, "spa"), english),
        ),
        regions=CountryRegions(
            continent=localize_region(first_or(country.continents, "")),
            region=localize_region(country.region or ""),
            sub_region=localize_region(country.subregion or ""),
        ),
    )


def _drop_invalid_fields(item: dict[str, Any], errors: list[Any]) -> bool:
    """
    Remove the fields pydantic rejected so they validate as absent.

    The deepest object key on each error path is dropped: a bad
    `idd.suffixes` entry loses `suffixes` but keeps `idd.root`.
    Returns False when nothing could be removed.
    """
    removed = False
    for err in errors:
        parent: Any = None
        key: str | None = None
        node: Any = item
        for part in err.get("loc", ()):
            if isinstance(node, dict) and isinstance(part, str) and part in node:
                parent, key = node, part
                node = node[part]
            elif isinstance(node, list) and isinstance(part, int) and 0 <= part < len(node):
                node = node[part]
            else:
                break
        if parent is not None and key in parent:
            del parent[key]
            removed = True
    return removed


def _validate_lenient(item: dict[str, Any], *, index: int) -> CountryIn | None:
    data = copy.deepcopy(item)
    while True:
        try:
            return CountryIn.model_validate(data)
        except ValidationError as e:
            errors = e.errors()
            if not _drop_invalid_fields(data, errors):
                logger.warning("country_record_skipped", index=index, cca2=item.get("cca2"), reason=str(e))
                return None
            logger.warning(
                "country_fields_dropped",
                index=index,
                cca2=data.get("cca2"),
                fields=[".".join(str(p) for p in err.get("loc", ())) for err in errors],
            )


def decode_countries(payload: Any) -> list[CountryIn]:
    """
    Parse the /all response body into CountryIn models.

    Fields with an unexpected type are dropped (treated as absent) instead of
    failing the country; only items that are not objects are skipped.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of countries, got {type(payload).__name__}")

    countries: list[CountryIn] = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            logger.warning("country_record_skipped", index=idx, reason="not_an_object")
            continue
        country = _validate_lenient(item, index=idx)
        if country is not None:
            countries.append(country)
    return countries


def sort_key(country: CountryIn) -> tuple[str, str]:
    """
    Accent- and case-insensitive order on the English name, so "Åland Islands"
    sorts with the A's. Ties fall back to the raw name.
    """
    name = english_name(country)
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, name


def transform_countries(payload: Any) -> list[dict[str, Any]]:
    """
    RAW -> output rows for countries.json
    PK: code (ISO 3166-1 alpha-2)
    Order: English common name, ascending (accent/case-insensitive)
    """
    countries = [c for c in decode_countries(payload) if has_code(c)]
    countries.sort(key=sort_key)

    rows: list[dict[str, Any]] = []
    seen: set[str] = set()

    for c in countries:
        code = c.cca2 or ""
        if code in seen:
            logger.warning("duplicate_country_code", code=code, name=english_name(c))
            continue
        seen.add(code)
        rows.append(transform_country(c).model_dump(by_alias=True))

    return rows
