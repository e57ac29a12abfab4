"""Tests for mime_composer.addresses."""

from __future__ import annotations

import base64

import pytest

from mime_composer.addresses import (
    encode_address_list,
    find_addresses,
    is_email_address,
    split_address_list,
)


class TestIsEmailAddress:
    @pytest.mark.parametrize("value", ["a@x.com", "first.last@example.com", "x+tag@mail.example.org", "a@x"])
    def test_valid(self, value: str):
        assert is_email_address(value)

    @pytest.mark.parametrize("value", ["", "plain", "a@", "@x.com", "a@bad..host", "a b@x.com", "a@@x.com"])
    def test_invalid(self, value: str):
        assert not is_email_address(value)

    @pytest.mark.parametrize(
        "value",
        ["ops@corp.local", "dev@build.test", "root@mailhost", "admin@localhost", "Ops@Corp.LOCAL"],
    )
    def test_private_and_dotless_domains(self, value: str):
        assert is_email_address(value)

    def test_special_use_domain_still_checks_syntax(self):
        assert not is_email_address("ops@bad..local")


class TestFindAddresses:
    def test_bare_addresses(self):
        assert find_addresses("a@x.com, b@x.com") == ["a@x.com", "b@x.com"]

    def test_display_names_and_separators(self):
        value = '"Jane Doe" <jane@example.com>, bob@example.com; Carol <carol@example.com>'
        assert find_addresses(value) == ["jane@example.com", "bob@example.com", "carol@example.com"]

    def test_quoted_fragment_is_skipped(self):
        value = '"x@y.com" <real@example.com>'
        assert find_addresses(value) == ["real@example.com"]

    def test_invalid_candidates_are_dropped(self):
        assert find_addresses("nobody@bad..host, ok@example.com") == ["ok@example.com"]

    def test_duplicates_kept_in_order(self):
        assert find_addresses("a@x.com b@x.com a@x.com") == ["a@x.com", "b@x.com", "a@x.com"]

    def test_empty(self):
        assert find_addresses("") == []

    def test_custom_validator(self):
        assert find_addresses("a@x.com, b@y.com", lambda addr: addr.endswith("y.com")) == ["b@y.com"]


class TestSplitAddressList:
    def test_commas_and_semicolons(self):
        assert split_address_list("a@x.com, b@x.com; c@x.com") == ["a@x.com", "b@x.com", "c@x.com"]

    def test_comma_inside_quotes(self):
        value = '"Doe, Jane" <jane@example.com>, bob@example.com'
        assert split_address_list(value) == ['"Doe, Jane" <jane@example.com>', "bob@example.com"]

    def test_escaped_quote(self):
        value = '"Say \\"hi\\", Al" <al@example.com>, b@x.com'
        assert split_address_list(value) == ['"Say \\"hi\\", Al" <al@example.com>', "b@x.com"]

    def test_empty_entries_dropped(self):
        assert split_address_list(" , a@x.com,, ") == ["a@x.com"]


class TestEncodeAddressList:
    def test_ascii_list_unchanged(self):
        value = '"Jane Doe" <jane@example.com>, bob@example.com'
        assert encode_address_list(value) == value

    def test_ascii_trims_separators_and_whitespace(self):
        assert encode_address_list(" a@x.com,   b@x.com; ") == "a@x.com, b@x.com"

    def test_only_display_name_is_encoded(self):
        encoded = encode_address_list('"Jörg Müller" <jorg@example.com>')
        assert encoded.endswith(" <jorg@example.com>")
        word = encoded.split(" <")[0]
        assert word.startswith("=?UTF-8?B?") and word.endswith("?=")
        assert base64.b64decode(word[10:-2]).decode("utf-8") == "Jörg Müller"

    def test_mixed_scripts_encoded_per_address(self):
        encoded = encode_address_list("Zoë <zoe@example.com>, bob@example.com, 李 <li@example.com>")
        entries = encoded.split(", ")
        assert len(entries) == 3
        assert entries[0].endswith("<zoe@example.com>")
        assert entries[1] == "bob@example.com"
        assert entries[2].startswith("=?UTF-8?B?")
        assert entries[2].endswith("<li@example.com>")

    def test_non_ascii_without_angle_address(self):
        encoded = encode_address_list("josé@example.com")
        assert encoded == "=?UTF-8?B?" + base64.b64encode("josé@example.com".encode()).decode() + "?="
