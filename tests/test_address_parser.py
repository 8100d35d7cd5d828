import pytest

from emailaddress.common.address_parser import ParsedAddress, parse_address
from emailaddress.common.errors import AddressSyntaxError

accepted_tests = {
    "bg@example.com": ("", "bg@example.com"),
    "  bg@example.com": ("", "bg@example.com"),
    "Barry Gibbs <bg@example.com>": ("Barry Gibbs", "bg@example.com"),
    '"Gibbs, Barry" <bg@example.com>': ("Gibbs, Barry", "bg@example.com"),
    '"Barry \\"The Voice\\" Gibbs" <bg@example.com>': ('Barry "The Voice" Gibbs', "bg@example.com"),
    "<bg@example.com>": ("", "bg@example.com"),
    "bg@example.com (Barry Gibbs)": ("Barry Gibbs", "bg@example.com"),
    "bg@example.com (Barry (The Voice) Gibbs)": ("Barry (The Voice) Gibbs", "bg@example.com"),
    "Joe Q. Public <john.q.public@example.com>": ("Joe Q. Public", "john.q.public@example.com"),
    "Barry Gibbs (bee gee) <bg@example.com>": ("Barry Gibbs", "bg@example.com"),
    '" "@example.org': ("", " @example.org"),
    '"john..doe"@example.org': ("", "john..doe@example.org"),
    "user@[192.168.2.1]": ("", "user@[192.168.2.1]"),
    "user@[2001:db8::1]": ("", "user@[2001:db8::1]"),
    "=?utf-8?q?J=C3=B6rg?= <j@example.com>": ("Jörg", "j@example.com"),
    "=?utf-8?q?J=C3=B6?= =?utf-8?q?rg?= <j@example.com>": ("Jörg", "j@example.com"),
    "=?utf-8?b?SsO2cmc=?= Doe <j@example.com>": ("Jörg Doe", "j@example.com"),
    "j@example.com (=?utf-8?q?J=C3=B6rg?=)": ("Jörg", "j@example.com"),
    # not a well formed encoded-word, kept as typed
    "=?utf-8?x?abc?= <j@example.com>": ("=?utf-8?x?abc?=", "j@example.com"),
    # codec errors other than an unknown charset keep the word as typed
    "a@b.com (=?idna?q?xn--?=)": ("=?idna?q?xn--?=", "a@b.com"),
    "=?idna?q?xn--?= <j@example.com>": ("=?idna?q?xn--?=", "j@example.com"),
}

rejected_tests = {
    "": "no address",
    " \t": "no address",
    "Abc.example.com": "missing '@' or angle-addr",
    '""': "missing '@' or angle-addr",
    "Barry Gibbs": "no angle-addr",
    "gb@": "no angle-addr",
    "john..doe@example.com": "no angle-addr",
    "<bg@example.com": "unclosed angle-addr",
    "bg@example.com>": "expected single address, got '>'",
    "a@b.com, c@d.com": "expected single address, got ', c@d.com'",
    "Barry Gibbs <>": "invalid string",
    "Barry Gibbs <bg>": "missing @ in addr-spec",
    "Barry Gibbs <bg@": "no domain in addr-spec",
    "Barry Gibbs <   ": "no addr-spec",
    "Barry <.bg@example.com>": "leading dot in atom",
    "Barry <bg.@example.com>": "trailing dot in atom",
    "Barry <b..g@example.com>": "double dot in atom",
    "Barry <bg@example..com>": "double dot in atom",
    'Barry <""@example.com>': "empty quoted-string in addr-spec",
    # a quoted local-part that fails to parse counts as empty
    'Barry <"bg@example.com>': "empty quoted-string in addr-spec",
    '"unclosed': "missing word in phrase: unclosed quoted-string",
    "Barry <bg@[192.168.2.1>": "unclosed domain-literal",
    "Barry <bg@[IPv6:2001:db8::1]>": "invalid IP address in domain-literal: 'IPv6:2001:db8::1'",
    "Barry <bg@[not an ip]>": "bad character in domain-literal: ' '",
    "bg@example.com (Barry": "misformatted parenthetical comment",
    "bg@example.com (Barry) (Gibbs": "misformatted parenthetical comment",
    "=?x-no-such-charset?q?abc?= <j@example.com>": "missing word in phrase: charset not supported: 'x-no-such-charset'",
    # a one-member group is rejected on purpose: it is an address list, not a
    # standalone address, even though RFC 5322 grammars accept it
    "Group: a@example.com;": "missing '@' or angle-addr",
}


@pytest.mark.parametrize("address, expected", accepted_tests.items())
def test_parse_address(address, expected):
    assert parse_address(address) == ParsedAddress(*expected)


@pytest.mark.parametrize("address, message", rejected_tests.items())
def test_parse_address_rejected(address, message):
    with pytest.raises(AddressSyntaxError) as exc:
        parse_address(address)
    assert str(exc.value) == message


def test_bad_character_in_quoted_local_part():
    with pytest.raises(AddressSyntaxError) as exc:
        parse_address('Barry <"b\x01g"@example.com>')
    assert str(exc.value) == "empty quoted-string in addr-spec"


def test_phrase_without_words_reports_cause():
    with pytest.raises(AddressSyntaxError) as exc:
        parse_address('"b\x01g" <bg@example.com>')
    assert str(exc.value) == f"missing word in phrase: bad character in quoted-string: {chr(1)!r}"


@pytest.mark.parametrize("address", [
    "i_like_underscore@but_its_not_allowed_in_this_part.example.com",
    "simple@-example.com-",
    "1234567890123456789012345678901234567890123456789012345678901234+x@example.com",
    "mailhost!username@example.org",
])
def test_permissive_forms_are_accepted(address):
    assert parse_address(address).address_spec == address


def test_parsed_address_is_frozen():
    addr = parse_address("bg@example.com")
    with pytest.raises(AttributeError):
        addr.display_name = "Barry"


def test_parse_address_rejects_non_str():
    with pytest.raises(TypeError):
        parse_address(None)
