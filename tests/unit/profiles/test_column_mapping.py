"""Tests for column mapping suggestions."""

from __future__ import annotations

from inspectroute.profiles.column_mapping import (
    FIELD_LABELS,
    FIELD_PRIORITY,
    format_mappings_for_db,
    generate_company_code,
    suggest_mappings,
    unmapped_columns,
    validate_mappings,
)

SAMPLE_HEADERS = ["Property Address", "City", "State", "Zip Code", "Insured Name", "Due Date", "Zzzz"]


class TestSuggestMappings:
    def test_exact_matches_win(self):
        mappings = suggest_mappings(SAMPLE_HEADERS)
        assert mappings["address"] == "Property Address"
        assert mappings["city"] == "City"
        assert mappings["state"] == "State"
        assert mappings["zip"] == "Zip Code"
        assert mappings["insured"] == "Insured Name"
        assert mappings["due_date"] == "Due Date"

    def test_every_field_is_present(self):
        assert list(suggest_mappings(SAMPLE_HEADERS)) == FIELD_PRIORITY

    def test_header_used_at_most_once(self):
        mappings = suggest_mappings(["City"])
        assert [f for f, h in mappings.items() if h == "City"] == ["city"]

    def test_weak_partial_match_rejected(self):
        # "zzzz" contains no keyword and no keyword contains it
        assert set(suggest_mappings(["zzzz"]).values()) == {None}

    def test_partial_match_scored_by_length_ratio(self):
        # "insured name (primary)" contains "insured name": 12/22*80 > 30
        mappings = suggest_mappings(["Insured Name (Primary)"])
        assert mappings["insured"] == "Insured Name (Primary)"


def test_unmapped_columns():
    mappings = suggest_mappings(SAMPLE_HEADERS)
    assert unmapped_columns(SAMPLE_HEADERS, mappings) == ["Zzzz"]


class TestGenerateCompanyCode:
    def test_multi_word_initials(self):
        assert generate_company_code("Summit Inspection Group") == "SIG"

    def test_caps_at_three_words(self):
        assert generate_company_code("Alpha Beta Gamma Delta") == "ABG"

    def test_single_word_prefix(self):
        assert generate_company_code("milestone") == "MIL"

    def test_short_words_ignored(self):
        assert generate_company_code("of an") == "NEW"


def test_validate_mappings_reports_missing_required():
    result = validate_mappings({"address": "Street", "city": None, "state": "ST"})
    assert not result.valid
    assert result.missing == ["city", "zip"]


def test_format_mappings_for_db_inverts_and_drops_nulls():
    assert format_mappings_for_db({"address": "Street", "city": None}) == {"Street": "address"}


def test_every_field_has_a_label():
    assert set(FIELD_LABELS) == set(FIELD_PRIORITY)
