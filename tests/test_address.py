from __future__ import annotations

import pytest

from address.normalizer import AddressNormalizer, strip_leading_date


@pytest.fixture
def normalizer(reference):
    return AddressNormalizer(reference)


@pytest.mark.parametrize("raw, expected", [
    ("4,665 Princes HWY MENINGIE 5264", "4665 PRINCES HIGHWAY, MENINGIE SA 5264"),
    ("12,345 Princes HWY MENINGIE 5264", "12345 PRINCES HIGHWAY, MENINGIE SA 5264"),
    ("1 Main ST MENINGIE 5264", "1 MAIN STREET, MENINGIE SA 5264"),
    ("8 Railway TCE TAILEM BEND SA 5260", "8 RAILWAY TERRACE, TAILEM BEND SA 5260"),
    ("1 Main ST MENINGE 5264", "1 MAIN STREET, MENINGIE SA 5264"),
    ("7/02/2019 1 Main ST MENINGIE 5264", "1 MAIN STREET, MENINGIE SA 5264"),
])
def test_normalize(normalizer, raw, expected):
    assert normalizer.normalize(raw) == expected


@pytest.mark.parametrize("canonical", [
    "4665 PRINCES HIGHWAY, MENINGIE SA 5264",
    "12345 PRINCES HIGHWAY, MENINGIE SA 5264",
    "1 MAIN STREET, MENINGIE SA 5264",
    "8 RAILWAY TERRACE, TAILEM BEND SA 5260",
    "12 MAIN STREET, MENINGIE SA 5264",
    "1 MAIN STREET, MENINGIE SA 5999",
    "10 Smith ROAD, MENINGIE SA 5264",
    "3 Princes HWY",
    "5 Smith Street Adelaide SA 5000",
])
def test_normalize_is_idempotent(normalizer, canonical):
    assert normalizer.normalize(canonical) == canonical


def test_outputs_normalize_to_themselves(normalizer):
    for raw in ("4,665 Princes HWY MENINGIE 5264", "12 Main ST", "3 Princes HWY", "10 Smith RD MENINGIE 5264"):
        once = normalizer.normalize(raw)
        assert normalizer.normalize(once) == once


@pytest.mark.parametrize("raw", ["", "   ", "LOT: 12 DP 3456", "lot: 12 DP 3456"])
def test_no_street_address(normalizer, raw):
    assert normalizer.normalize(raw) == ""


def test_single_suburb_street_supplies_the_suburb(normalizer):
    assert normalizer.normalize("12 Main ST") == "12 MAIN STREET, MENINGIE SA 5264"


def test_street_in_several_suburbs_keeps_the_input(normalizer):
    assert normalizer.normalize("3 Princes HWY") == "3 Princes HWY"


def test_found_postcode_replaces_the_dictionary_one(normalizer):
    assert normalizer.normalize("1 Main ST MENINGIE 5999") == "1 MAIN STREET, MENINGIE SA 5999"


def test_unknown_street_keeps_the_expanded_suffix(normalizer):
    assert normalizer.normalize("10 Smith RD MENINGIE 5264") == "10 Smith ROAD, MENINGIE SA 5264"


def test_unknown_suburb_falls_back_to_the_input(normalizer):
    assert normalizer.normalize("5 Smith  Street Adelaide SA 5000") == "5 Smith Street Adelaide SA 5000"


def test_matcher_is_injectable(reference):
    calls = []

    def never(candidate, targets, max_distance):
        calls.append((candidate, max_distance))
        return None

    normalizer = AddressNormalizer(reference, matcher=never)
    assert normalizer.normalize("1 Main ST MENINGIE 5264") == "1 Main ST MENINGIE 5264"
    assert calls[0] == ("MENINGIE", 1)


def test_strip_leading_date():
    assert strip_leading_date(" 7/02/2019 8 West Tce") == "8 West Tce"
    assert strip_leading_date("8 West Tce") == "8 West Tce"
