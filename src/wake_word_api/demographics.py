"""
Demographic reference tables used to validate upload labels.

The tables are read-only for the lifetime of the process; lookups only ever
check membership of a code, the labels are for humans reading the data.
"""
from types import MappingProxyType
from typing import Mapping

# "" is the unspecified default and never shows up in storage keys.
AGES: Mapping[str, str] = MappingProxyType({
    "": "Prefer not to say",
    "child": "Under 13",
    "teen": "13-17",
    "young_adult": "18-29",
    "adult": "30-49",
    "middle_aged": "50-64",
    "senior": "65 and over",
})

GENDERS: Mapping[str, str] = MappingProxyType({
    "female": "Female",
    "male": "Male",
    "non_binary": "Non-binary",
    "other": "Other",
    "do_not_wish_to_say": "Do not wish to say",
})

LEGACY_ACCENTS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": MappingProxyType({
        "us": "American",
        "uk": "British",
        "au": "Australian",
        "ca": "Canadian",
        "ie": "Irish",
        "in": "Indian",
        "nz": "New Zealand",
        "za": "South African",
        "scotland": "Scottish",
        "other": "Other",
    }),
    "de": MappingProxyType({
        "de": "Germany",
        "at": "Austria",
        "ch": "Switzerland",
        "other": "Other",
    }),
    "es": MappingProxyType({
        "es": "Spain",
        "mx": "Mexico",
        "ar": "Argentina",
        "co": "Colombia",
        "other": "Other",
    }),
    "fr": MappingProxyType({
        "fr": "France",
        "be": "Belgium",
        "ca": "Canada",
        "ch": "Switzerland",
        "other": "Other",
    }),
    "nl": MappingProxyType({
        "nl": "Netherlands",
        "be": "Belgium",
        "other": "Other",
    }),
})
