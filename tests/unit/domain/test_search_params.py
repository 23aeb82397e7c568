"""
Tests for the SearchParams value object: normalization, validation,
derived properties and construction from API payloads.
"""

import dataclasses

import pytest

from voterlookup.domain.entities.search_params import (
    DEFAULT_REGION,
    MISSING_NAME_MESSAGE,
    SHORT_NAME_MESSAGE,
    SearchParams,
)
from voterlookup.domain.errors import ValidationError
from tests.conftest import make_params


class TestNormalized:
    def test_trims_and_replaces_ligature_in_free_text(self):
        params = make_params(
            first_name="  Արևիկ ",
            last_name="Վարդևանյան",
            street=" Երևանյան ",
            community="Ավան",
        ).normalized()
        assert params.first_name == "Արեւիկ"
        assert params.last_name == "Վարդեւանյան"
        assert params.street == "Երեւանյան"
        assert params.community == "Ավան"

    def test_empty_region_defaults_to_capital(self):
        params = make_params(region="  ").normalized()
        assert params.region == DEFAULT_REGION

    def test_default_region_is_capital(self):
        assert make_params().region == "ԵՐԵՎԱՆ"

    def test_birth_date_is_only_trimmed(self):
        params = make_params(birth_date=" 18/05/1981 ").normalized()
        assert params.birth_date == "18/05/1981"

    def test_is_idempotent(self):
        once = make_params(first_name=" Արևիկ ", birth_date="18/05/1981").normalized()
        assert once.normalized() == once

    def test_returns_new_instance(self):
        original = make_params(first_name=" Արևիկ ")
        original.normalized()
        assert original.first_name == " Արևիկ "

    def test_is_frozen(self):
        params = make_params()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.first_name = "x"  # type: ignore


class TestValidate:
    def test_valid_params_pass(self):
        make_params().normalized().validate()

    @pytest.mark.parametrize("first,last", [("", "Գրիգորյան"), ("Գրիգոր", ""), ("", "")])
    def test_missing_names_raise(self, first, last):
        with pytest.raises(ValidationError) as exc_info:
            make_params(first_name=first, last_name=last).normalized().validate()
        assert str(exc_info.value) == MISSING_NAME_MESSAGE

    def test_whitespace_only_name_counts_as_missing(self):
        with pytest.raises(ValidationError, match="required"):
            make_params(last_name="   ").normalized().validate()

    @pytest.mark.parametrize("first,last", [("Գ", "Գրիգորյան"), ("Գրիգոր", "Գ")])
    def test_single_character_names_raise(self, first, last):
        with pytest.raises(ValidationError) as exc_info:
            make_params(first_name=first, last_name=last).normalized().validate()
        assert str(exc_info.value) == SHORT_NAME_MESSAGE

    def test_two_character_names_pass(self):
        make_params(first_name="Ան", last_name="Ով").normalized().validate()

    def test_messages_are_bilingual(self):
        assert "/" in MISSING_NAME_MESSAGE
        assert "/" in SHORT_NAME_MESSAGE


class TestDerivedProperties:
    def test_iso_birth_date(self):
        assert make_params(birth_date="18/05/1981").iso_birth_date == "1981-05-18"

    def test_iso_birth_date_drops_invalid(self):
        assert make_params(birth_date="18/13/1981").iso_birth_date == ""

    @pytest.mark.parametrize("value", ["1²/05/1981", "١٨/05/1981"])
    def test_iso_birth_date_drops_non_ascii_digits(self, value):
        assert make_params(birth_date=value).iso_birth_date == ""

    @pytest.mark.parametrize("field_name", ["street", "building", "apartment"])
    def test_has_address_when_any_address_part_set(self, field_name):
        assert make_params(**{field_name: "1"}).has_address is True

    def test_no_address_by_default(self):
        assert make_params(community="Ավան", district="1/01").has_address is False


class TestFromDict:
    def test_builds_from_payload(self):
        params = SearchParams.from_dict(
            {"first_name": "Գրիգոր", "last_name": "Գրիգորյան", "street": "Աբովյան"}
        )
        assert params.first_name == "Գրիգոր"
        assert params.street == "Աբովյան"

    def test_none_values_become_empty(self):
        params = SearchParams.from_dict(
            {"first_name": "Գրիգոր", "last_name": None, "region": None}
        )
        assert params.last_name == ""
        assert params.region == ""
        assert params.normalized().region == DEFAULT_REGION

    def test_missing_names_become_empty(self):
        params = SearchParams.from_dict({})
        assert params.first_name == ""
        assert params.last_name == ""

    def test_unknown_keys_ignored(self):
        params = SearchParams.from_dict(
            {"first_name": "Գրիգոր", "last_name": "Գրիգորյան", "captcha": "x"}
        )
        assert not hasattr(params, "captcha")
