from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.transforms.countries import (
    NO_COUNTRY_FLAG,
    CountryIn,
    IddIn,
    decode_countries,
    first_or,
    flag_from_code,
    phone_code,
    resolve_translation,
    transform_countries,
    transform_country,
)


def _fixture() -> list:
    p = Path(__file__).resolve().parents[1] / "fixtures" / "api_responses" / "restcountries_all.json"
    return json.loads(p.read_text(encoding="utf-8"))


def test_transform_countries_fixture() -> None:
    payload = _fixture()
    rows = transform_countries(payload)

    # "Nowhere" has an empty cca2 and is dropped
    assert len(rows) == len(payload) - 1
    assert [r["code"] for r in rows] == ["AQ", "FR", "DE", "TR", "US"]

    names = [r["names"]["english"] for r in rows]
    assert names == sorted(names)
    assert len({r["code"] for r in rows}) == len(rows)


def test_transform_countries_output_shape() -> None:
    rows = transform_countries(_fixture())
    de = next(r for r in rows if r["code"] == "DE")

    assert de == {
        "code": "DE",
        "flag": "🇩🇪",
        "phoneCode": "+49",
        "names": {
            "german": "Deutschland",
            "english": "Germany",
            "french": "Allemagne",
            "italian": "Germania",
            "spanish": "Alemania",
        },
        "regions": {
            "continent": {
                "german": "Europa",
                "english": "Europe",
                "french": "Europe",
                "italian": "Europa",
                "spanish": "Europa",
            },
            "region": {
                "german": "Europa",
                "english": "Europe",
                "french": "Europe",
                "italian": "Europa",
                "spanish": "Europa",
            },
            "subRegion": {
                "german": "Westeuropa",
                "english": "Western Europe",
                "french": "Europe occidentale",
                "italian": "Europa occidentale",
                "spanish": "Europa occidental",
            },
        },
    }


def test_transform_countries_fallbacks() -> None:
    rows = {r["code"]: r for r in transform_countries(_fixture())}

    aq = rows["AQ"]
    assert aq["phoneCode"] == ""
    assert aq["names"]["german"] == "Antarktis"
    # no ita/spa translation -> English
    assert aq["names"]["italian"] == "Antarctica"
    assert aq["names"]["spanish"] == "Antarctica"
    # "Antarctic" is not in the region table
    assert aq["regions"]["region"] == {
        "german": "Antarctic",
        "english": "Antarctic",
        "french": "Antarctic",
        "italian": "Antarctic",
        "spanish": "Antarctic",
    }
    assert set(aq["regions"]["subRegion"].values()) == {""}
    assert aq["regions"]["continent"]["spanish"] == "Antártida"

    us = rows["US"]
    assert us["flag"] == "\U0001F1FA\U0001F1F8"
    assert us["phoneCode"] == "+1201"
    assert us["regions"]["subRegion"]["german"] == "Nordamerika"

    # only the first continent is used
    assert rows["TR"]["regions"]["continent"]["english"] == "Europe"


def test_end_to_end_minimal_payload() -> None:
    payload = [
        {
            "cca2": "DE",
            "name": {"common": "Germany"},
            "translations": {"fra": {"common": "Allemagne"}},
            "region": "Europe",
            "continents": ["Europe"],
            "idd": {"root": "+4", "suffixes": ["9"]},
        },
        {"cca2": "", "name": {"common": "NoCode"}},
    ]
    rows = transform_countries(payload)

    assert len(rows) == 1
    de = rows[0]
    assert de["code"] == "DE"
    assert de["phoneCode"] == "+49"
    assert de["flag"] == "\U0001F1E9\U0001F1EA"
    assert de["names"]["french"] == "Allemagne"
    assert de["names"]["italian"] == "Germany"
    assert de["names"]["german"] == "Germany"
    assert de["regions"]["region"]["german"] == "Europa"
    assert de["regions"]["subRegion"]["english"] == ""


def test_missing_code_and_missing_name() -> None:
    payload = [
        {"name": {"common": "NoKey"}},
        {"cca2": None, "name": {"common": "NullCode"}},
        {"cca2": "ZZ"},
        {"cca2": "AA", "name": {"common": "Aland"}},
    ]
    rows = transform_countries(payload)

    # absent English name sorts as "" (first)
    assert [r["code"] for r in rows] == ["ZZ", "AA"]
    zz = rows[0]
    assert zz["names"] == {"german": "", "english": "", "french": "", "italian": "", "spanish": ""}
    assert zz["regions"]["continent"]["english"] == ""


def test_duplicate_codes_keep_first_in_name_order() -> None:
    payload = [
        {"cca2": "XK", "name": {"common": "Kosovo (b)"}},
        {"cca2": "XK", "name": {"common": "Kosovo (a)"}},
    ]
    rows = transform_countries(payload)
    assert len(rows) == 1
    assert rows[0]["names"]["english"] == "Kosovo (a)"


def test_decode_countries_drops_only_bad_fields() -> None:
    payload = [
        "not a country",
        {"cca2": "DE", "name": {"common": "Germany"}, "continents": "Europe", "region": "Europe"},
        {"cca2": "FR", "name": {"common": "France"}, "unknownField": 1},
    ]
    countries = decode_countries(payload)

    assert [c.cca2 for c in countries] == ["DE", "FR"]
    de = countries[0]
    assert de.continents is None
    assert de.region == "Europe"
    assert de.name is not None and de.name.common == "Germany"


def test_decode_countries_does_not_mutate_payload() -> None:
    item = {"cca2": "DE", "continents": "Europe"}
    decode_countries([item])
    assert item == {"cca2": "DE", "continents": "Europe"}


def test_wrongly_typed_fields_degrade_to_defaults() -> None:
    payload = [
        {"cca2": "DE", "name": {"common": "Germany"}, "continents": "Europe", "idd": {"root": "+4", "suffixes": ["9"]}},
        {"cca2": "FR", "name": {"common": "France"}, "idd": {"root": "+3", "suffixes": [None]}, "continents": ["Europe"]},
        {"cca2": "IT", "name": {"common": "Italy"}, "translations": "none", "flag": 42},
        {"cca2": "ES", "name": "Spain"},
    ]
    rows = {r["code"]: r for r in transform_countries(payload)}

    assert set(rows) == {"DE", "FR", "IT", "ES"}
    assert rows["DE"]["regions"]["continent"]["english"] == ""
    assert rows["DE"]["phoneCode"] == "+49"
    # bad suffix list is dropped, the root survives
    assert rows["FR"]["phoneCode"] == "+3"
    assert rows["FR"]["regions"]["continent"]["german"] == "Europa"
    assert rows["IT"]["names"]["german"] == "Italy"
    assert rows["IT"]["flag"] == "\U0001F1EE\U0001F1F9"
    assert rows["ES"]["names"]["english"] == ""


def test_sort_ignores_accents_and_case() -> None:
    payload = [
        {"cca2": "ZW", "name": {"common": "Zimbabwe"}},
        {"cca2": "AX", "name": {"common": "Åland Islands"}},
        {"cca2": "AL", "name": {"common": "Albania"}},
        {"cca2": "CW", "name": {"common": "Curaçao"}},
        {"cca2": "CU", "name": {"common": "Cuba"}},
        {"cca2": "AF", "name": {"common": "afghanistan"}},
    ]
    rows = transform_countries(payload)
    assert [r["code"] for r in rows] == ["AF", "AX", "AL", "CU", "CW", "ZW"]


def test_decode_countries_requires_array() -> None:
    with pytest.raises(ValueError):
        decode_countries({"status": 404, "message": "Not Found"})


@pytest.mark.parametrize(
    "translation,english,expected",
    [
        ("Allemagne", "Germany", "Allemagne"),
        (None, "Germany", "Germany"),
        ("", "Germany", "Germany"),
        ("   ", "Germany", "Germany"),
        (None, None, ""),
    ],
)
def test_resolve_translation(translation, english, expected) -> None:
    assert resolve_translation(translation, english) == expected


def test_phone_code() -> None:
    assert phone_code(IddIn(root="+4", suffixes=["9"])) == "+49"
    assert phone_code(IddIn(root="+1", suffixes=[])) == "+1"
    assert phone_code(IddIn(root="+7", suffixes=None)) == "+7"
    assert phone_code(IddIn(root=None, suffixes=["9"])) == ""
    assert phone_code(None) == ""


def test_flag_from_code() -> None:
    assert flag_from_code("DE") == "\U0001F1E9\U0001F1EA"
    assert flag_from_code("de") == "\U0001F1E9\U0001F1EA"
    assert flag_from_code("DEU") == NO_COUNTRY_FLAG
    assert flag_from_code("D1") == NO_COUNTRY_FLAG
    assert flag_from_code("ÄÖ") == NO_COUNTRY_FLAG
    assert flag_from_code("") == NO_COUNTRY_FLAG
    assert flag_from_code(None) == NO_COUNTRY_FLAG


def test_source_flag_wins_over_derived() -> None:
    c = CountryIn.model_validate({"cca2": "DE", "flag": "X", "name": {"common": "Germany"}})
    assert transform_country(c).flag == "X"

    c = CountryIn.model_validate({"cca2": "DE", "flag": "", "name": {"common": "Germany"}})
    assert transform_country(c).flag == "\U0001F1E9\U0001F1EA"


def test_first_or() -> None:
    assert first_or(["Europe", "Asia"], "") == "Europe"
    assert first_or([], "") == ""
    assert first_or(None, "fallback") == "fallback"
