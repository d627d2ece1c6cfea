"""Tests for recipient token parsing and formatting."""

import pytest

from communique.errors import MalformedToken, UnknownTag
from communique.recipients.tokens import (
    FilterKind,
    RecipientKind,
    TagName,
    Token,
    format_token,
    parse_token,
    parse_tokens,
    read_token_file,
    reference_name,
)


class TestReferenceName:

    def test_lowercases_and_trims(self):
        assert reference_name("  Testlandia ") == "testlandia"

    def test_whitespace_runs_become_one_underscore(self):
        assert reference_name("The  North\tPacific") == "the_north_pacific"

    def test_existing_underscores_kept(self):
        assert reference_name("already_ref") == "already_ref"


class TestParseFilterKind:

    def test_normal(self):
        assert parse_token("region:europe").filter_kind is FilterKind.NORMAL

    def test_include(self):
        assert parse_token("+region:europe").filter_kind is FilterKind.INCLUDE

    def test_exclude(self):
        assert parse_token("-region:europe").filter_kind is FilterKind.EXCLUDE

    def test_require_regex_wins_over_include(self):
        token = parse_token("+regex:abc")
        assert token.filter_kind is FilterKind.REQUIRE_REGEX
        assert token.name == "abc"

    def test_exclude_regex_wins_over_exclude(self):
        token = parse_token("-regex:abc")
        assert token.filter_kind is FilterKind.EXCLUDE_REGEX
        assert token.name == "abc"

    def test_regex_pattern_case_and_spaces_kept(self):
        token = parse_token("+regex:^The [A-Z]+ Of .*$")
        assert token.name == "^The [A-Z]+ Of .*$"

    def test_regex_pattern_containing_kind_word(self):
        token = parse_token("-regex:region:.*")
        assert token.filter_kind is FilterKind.EXCLUDE_REGEX
        assert token.name == "region:.*"

    def test_nation_starting_with_regex_is_not_a_pattern(self):
        token = parse_token("-regexia")
        assert token.filter_kind is FilterKind.EXCLUDE
        assert token.recipient_kind is RecipientKind.NATION
        assert token.name == "regexia"

    def test_prefix_case_insensitive(self):
        assert parse_token("+REGEX:abc").filter_kind is FilterKind.REQUIRE_REGEX


class TestParseRecipientKind:

    @pytest.mark.parametrize("text,kind", [
        ("nation:testlandia", RecipientKind.NATION),
        ("region:europe", RecipientKind.REGION),
        ("tag:wa", RecipientKind.TAG),
        ("flag:recruit", RecipientKind.FLAG),
    ])
    def test_prefixes(self, text, kind):
        assert parse_token(text).recipient_kind is kind

    def test_bare_name_is_nation(self):
        token = parse_token("Testlandia")
        assert token == Token(FilterKind.NORMAL, RecipientKind.NATION, "testlandia")

    def test_bare_name_with_leading_colon(self):
        assert parse_token(":testlandia").name == "testlandia"

    def test_name_normalized(self):
        token = parse_token("  -region:The North Pacific  ")
        assert token.filter_kind is FilterKind.EXCLUDE
        assert token.recipient_kind is RecipientKind.REGION
        assert token.name == "the_north_pacific"

    def test_uppercase_kind(self):
        token = parse_token("REGION:Europe")
        assert token.recipient_kind is RecipientKind.REGION
        assert token.name == "europe"

    def test_name_after_first_colon_only(self):
        assert parse_token("region:foo:bar").name == "foo:bar"

    def test_word_starting_with_kind_is_a_nation(self):
        token = parse_token("nationals")
        assert token.recipient_kind is RecipientKind.NATION
        assert token.name == "nationals"

    @pytest.mark.parametrize("legacy,tag", [
        ("wa:members", "wa"),
        ("wa:nations", "wa"),
        ("wa:delegates", "delegates"),
        ("world:new", "new"),
    ])
    def test_legacy_tag_aliases(self, legacy, tag):
        token = parse_token(legacy)
        assert token.recipient_kind is RecipientKind.TAG
        assert token.name == tag

    def test_legacy_alias_keeps_filter(self):
        token = parse_token("+wa:members")
        assert token == Token(FilterKind.INCLUDE, RecipientKind.TAG, "wa")


class TestParseErrors:

    @pytest.mark.parametrize("text", ["", "   ", "+", "-"])
    def test_empty(self, text):
        with pytest.raises(MalformedToken):
            parse_token(text)

    @pytest.mark.parametrize("text", ["region", "-tag", "+nation", "flag"])
    def test_kind_without_separator(self, text):
        with pytest.raises(MalformedToken, match="missing ':'"):
            parse_token(text)

    def test_empty_name(self):
        with pytest.raises(MalformedToken, match="empty name"):
            parse_token("region:")

    def test_empty_pattern(self):
        with pytest.raises(MalformedToken, match="empty regex"):
            parse_token("+regex:")

    def test_error_keeps_text(self):
        with pytest.raises(MalformedToken) as exc:
            parse_token("-tag")
        assert exc.value.text == "-tag"


class TestFormat:

    def test_format_region(self):
        assert format_token(parse_token("-region:Europe")) == "-region:europe"

    def test_format_bare_nation(self):
        assert format_token(parse_token("Testlandia")) == "nation:testlandia"

    def test_format_regex(self):
        assert format_token(parse_token("+regex:^A.*$")) == "+regex:^A.*$"

    def test_str_is_format(self):
        token = Token(FilterKind.INCLUDE, RecipientKind.TAG, "wa")
        assert str(token) == "+tag:wa"

    @pytest.mark.parametrize("text", [
        "region:europe",
        "+tag:wa",
        "-nation:Example Nation",
        "+regex:^[A-Z]+$",
        "-regex:.*_of_.*",
        "flag:Recruit Mode",
        "Testlandia",
        ":region:odd",
        "+wa:members",
        "region:foo:bar",
    ])
    def test_round_trip_stable(self, text):
        token = parse_token(text)
        formatted = format_token(token)
        assert parse_token(formatted) == token
        assert format_token(parse_token(formatted)) == formatted


class TestToken:

    def test_constructor_normalizes(self):
        token = Token(FilterKind.NORMAL, RecipientKind.REGION, " The East Pacific ")
        assert token.name == "the_east_pacific"

    def test_constructor_keeps_regex_case(self):
        token = Token(FilterKind.REQUIRE_REGEX, RecipientKind.NATION, " [A-Z]+ ")
        assert token.name == "[A-Z]+"

    def test_immutable(self):
        token = Token.nation("testlandia")
        with pytest.raises(Exception):
            token.name = "other"

    def test_with_filter(self):
        token = Token.nation("testlandia").with_filter(FilterKind.EXCLUDE)
        assert str(token) == "-nation:testlandia"

    def test_hashable(self):
        assert len({parse_token("Testlandia"), parse_token("nation:testlandia")}) == 1


class TestTagName:

    def test_known(self):
        assert TagName.from_name("Delegates") is TagName.DELEGATES

    def test_unknown(self):
        with pytest.raises(UnknownTag):
            TagName.from_name("bogus")


class TestParseTokens:

    def test_skips_comments_and_blanks(self):
        lines = ["# recipients", "", "region:europe", "   ", "  # sent", "-tag:wa"]
        tokens = parse_tokens(lines)
        assert [str(t) for t in tokens] == ["region:europe", "-tag:wa"]

    def test_read_file(self, tmp_path):
        path = tmp_path / "recipients.txt"
        path.write_text("region:europe\n# comment\n-Testlandia\n", encoding="utf-8")
        tokens = read_token_file(path)
        assert [str(t) for t in tokens] == ["region:europe", "-nation:testlandia"]

    def test_read_file_propagates_malformed(self, tmp_path):
        path = tmp_path / "recipients.txt"
        path.write_text("region:europe\nregion\n", encoding="utf-8")
        with pytest.raises(MalformedToken):
            read_token_file(path)
