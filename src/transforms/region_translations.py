from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


LANGUAGES = ("german", "french", "italian", "spanish")


@dataclass(frozen=True)
class RegionTranslation:
    german: str
    french: str
    italian: str
    spanish: str


def _t(german: str, french: str, italian: str, spanish: str) -> RegionTranslation:
    return RegionTranslation(german=german, french=french, italian=italian, spanish=spanish)


# Keys are the exact English strings REST Countries returns for continents/regions/subregions.
REGION_TRANSLATIONS: Mapping[str, RegionTranslation] = MappingProxyType(
    {
        "Europe": _t("Europa", "Europe", "Europa", "Europa"),
        "Asia": _t("Asien", "Asie", "Asia", "Asia"),
        "Africa": _t("Afrika", "Afrique", "Africa", "África"),
        "North America": _t("Nordamerika", "Amérique du Nord", "Nord America", "América del Norte"),
        "South America": _t("Südamerika", "Amérique du Sud", "Sud America", "América del Sur"),
        "Oceania": _t("Ozeanien", "Océanie", "Oceania", "Oceanía"),
        "Antarctica": _t("Antarktis", "Antarctique", "Antartide", "Antártida"),
        "Western Europe": _t("Westeuropa", "Europe occidentale", "Europa occidentale", "Europa occidental"),
        "Northern Europe": _t("Nordeuropa", "Europe du Nord", "Europa settentrionale", "Europa del Norte"),
        "Southern Europe": _t("Südeuropa", "Europe du Sud", "Europa meridionale", "Europa del Sur"),
        "Eastern Europe": _t("Osteuropa", "Europe de l'Est", "Europa orientale", "Europa Oriental"),
        "Central Europe": _t("Mitteleuropa", "Europe centrale", "Europa centrale", "Europa central"),
        "Southeast Europe": _t("Südosteuropa", "Europe du Sud-Est", "Europa sud-orientale", "Europa Sudoriental"),
        "Eastern Asia": _t("Ostasien", "Asie de l'Est", "Asia orientale", "Asia Oriental"),
        "South-Eastern Asia": _t("Südostasien", "Asie du Sud-Est", "Asia sud-orientale", "Sudeste Asiático"),
        "Southern Asia": _t("Südasien", "Asie du Sud", "Asia meridionale", "Asia del Sur"),
        "Western Asia": _t("Westasien", "Asie occidentale", "Asia occidentale", "Asia Occidental"),
        "Central Asia": _t("Zentralasien", "Asie centrale", "Asia centrale", "Asia Central"),
        "Caribbean": _t("Karibik", "Caraïbes", "Caraibi", "Caribe"),
        "Central America": _t("Mittelamerika", "Amérique centrale", "America centrale", "América Central"),
        "Northern America": _t("Nordamerika", "Amérique du Nord", "America settentrionale", "América del Norte"),
    }
)


def translate_region(english: str, language: str) -> str:
    """
    Translate a continent/region/subregion name.

    Exact, case-sensitive lookup; unknown names come back untranslated.
    """
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    entry = REGION_TRANSLATIONS.get(english)
    if entry is None:
        return english
    return getattr(entry, language)
