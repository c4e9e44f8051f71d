"""
Unit tests for ``core.domain.normalize``.  No database required.
"""

from __future__ import annotations

import pytest

from core.domain.exceptions import DomainError
from core.domain.normalize import (
    build_ref_keys,
    cid_key,
    normalize_cids,
    normalize_involved,
    normalize_plates,
    normalize_strings,
    normalize_tags,
)


class TestNormalizeStrings:

    def test_strips_drops_blanks_and_dedupes(self):
        assert normalize_strings([" a ", "", "b", "a", None]) == ["a", "b"]

    def test_single_string_is_one_item(self):
        assert normalize_strings("RPT-1") == ["RPT-1"]

    def test_limit(self):
        assert normalize_strings(["a", "b", "c"], limit=2) == ["a", "b"]


class TestNormalizeTags:

    def test_unknown_tags_are_dropped(self):
        assert normalize_tags(["Drog", "Ismeretlen", "Drog"], ["Drog", "Fegyver"]) == ["Drog"]

    def test_catalog_match_is_case_sensitive(self):
        assert normalize_tags(["drog"], ["Drog"]) == []


class TestNormalizePlates:

    def test_uppercase_and_dedupe(self):
        assert normalize_plates(["abc 123", "ABC 123", " ", "x-9"]) == ["ABC 123", "X-9"]

    def test_malformed_plate(self):
        with pytest.raises(DomainError) as excinfo:
            normalize_plates(["!!"])
        assert excinfo.value.code == "INVALID_PLATE"


class TestNormalizeCids:

    def test_positive_integers(self):
        assert normalize_cids([5, "5", "9", ""]) == [5, 9]

    @pytest.mark.parametrize("value", [0, -1, "abc", 1.5, 2**31, 10**30])
    def test_rejects_invalid(self, value):
        with pytest.raises(DomainError) as excinfo:
            normalize_cids([value])
        assert excinfo.value.code == "INVALID_CID"


class TestNormalizeInvolved:

    def test_later_entry_wins_in_first_position(self):
        result = normalize_involved([
            {"cid": 1, "name": "Anna", "role": "witness"},
            {"cid": 2, "name": "Béla", "role": "SUSPECT"},
            {"cid": 1, "name": "Anna K.", "role": "victim"},
        ])
        assert result == [
            {"cid": 1, "name": "Anna K.", "role": "victim"},
            {"cid": 2, "name": "Béla", "role": "suspect"},
        ]

    def test_unknown_role_becomes_other(self):
        assert normalize_involved([{"cid": 3, "name": "C", "role": "bystander"}])[0]["role"] == "other"

    def test_name_required(self):
        with pytest.raises(DomainError):
            normalize_involved([{"cid": 3, "name": " "}])


class TestRefKeys:

    def test_build(self):
        assert build_ref_keys([1, 22], ["ABC 123"]) == "|cid:1|cid:22|plate:ABC 123|"
        assert build_ref_keys() == ""

    def test_exact_match_marker(self):
        keys = build_ref_keys([12], [])
        assert cid_key(12) in keys
        assert cid_key(1) not in keys


class TestCidRange:

    def test_largest_column_value_is_accepted(self):
        assert normalize_cids([2**31 - 1]) == [2**31 - 1]

    def test_oversized_involved_party_cid(self):
        with pytest.raises(DomainError) as excinfo:
            normalize_involved([{"cid": 10**30, "name": "Anna", "role": "witness"}])
        assert excinfo.value.code == "INVALID_CID"
