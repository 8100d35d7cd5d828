"""
RFC 5322 single-address parser.

Understands both ``addr-spec`` (``local@domain``) and ``name-addr``
(``"Display Name" <local@domain>``). The grammar is deliberately loose in the
same places mail software in the wild is loose: underscores and edge hyphens
in domain labels, over-long local-parts and non-ASCII text are all accepted.
Group syntax (``name: a@b;``) is rejected even for a single member, since a
group is an address list rather than a standalone address.
"""
from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from email.errors import HeaderParseError
from email.header import decode_header

import regex as re

from emailaddress.common.errors import AddressSyntaxError

logger = logging.getLogger(__name__)

# VCHAR is printable ASCII plus anything non-ASCII; atext is VCHAR minus specials.
_ATOM_RE = re.compile(r'[^\x00-\x20\x7f()<>\[\]:;@\\,"]+')
# Phrase words also take the specials ( ) [ ] ; @ \ , so "Joe (Q.) Public" survives.
_PERMISSIVE_ATOM_RE = re.compile(r'[^\x00-\x20\x7f<>":]+')
_DTEXT_RE = re.compile(r'[^\x00-\x20\x7f\[\]\\]')

_ENCODED_WORD_RE = re.compile(r"=\?[^?\s]+\?[bBqQ]\?[^?\s]*\?=")

_WSP = " \t"
_WSP_RE = re.compile(r"[ \t]*")


def _is_vchar(ch: str) -> bool:
    return "!" <= ch <= "~" or ch >= "\x80"


@dataclass(frozen=True)
class ParsedAddress:
    """
    display_name: decoded display name, empty when none was given
    address_spec: local@domain with quoting removed from the local-part
    """
    display_name: str
    address_spec: str


class _AddressScanner:
    """
    Cursor over an immutable input string. Productions advance ``pos`` and
    slice only the tokens they return.
    """

    __slots__ = ("s", "pos")

    def __init__(self, s: str):
        self.s = s
        self.pos = 0

    # -------------------------
    # Low level cursor helpers
    # -------------------------

    def empty(self) -> bool:
        return self.pos >= len(self.s)

    def peek(self) -> str:
        return self.s[self.pos]

    def rest(self) -> str:
        return self.s[self.pos:]

    def consume(self, ch: str) -> bool:
        if self.empty() or self.s[self.pos] != ch:
            return False
        self.pos += 1
        return True

    def skip_space(self) -> None:
        self.pos = _WSP_RE.match(self.s, self.pos).end()

    def skip_cfws(self) -> bool:
        self.skip_space()
        while self.consume("("):
            _, ok = self.consume_comment()
            if not ok:
                return False
            self.skip_space()
        return True

    # -------------------------
    # Grammar productions
    # -------------------------

    def parse_single_address(self) -> ParsedAddress:
        addr = self.parse_address()
        if not self.skip_cfws():
            raise AddressSyntaxError("misformatted parenthetical comment")
        if not self.empty():
            raise AddressSyntaxError(f"expected single address, got {self.rest()!r}")
        return addr

    def parse_address(self) -> ParsedAddress:
        logger.debug("parse_address: %r", self.s)
        self.skip_space()
        if self.empty():
            raise AddressSyntaxError("no address")

        # addr-spec is the narrower grammar, so it goes first
        try:
            spec = self.consume_addr_spec()
        except AddressSyntaxError as e:
            logger.debug("parse_address: not an addr-spec: %s", e)
        else:
            display_name = ""
            self.skip_space()
            if not self.empty() and self.peek() == "(":
                display_name = self.consume_display_name_comment()
            return ParsedAddress(display_name, spec)

        display_name = ""
        if self.peek() != "<":
            display_name = self.consume_phrase()
        logger.debug("parse_address: display_name=%r", display_name)

        self.skip_space()
        if not self.consume("<"):
            if not display_name or _ATOM_RE.fullmatch(display_name):
                # "foo.bar" could have meant "foo.bar@domain" or "foo.bar <...>"
                raise AddressSyntaxError("missing '@' or angle-addr")
            raise AddressSyntaxError("no angle-addr")

        spec = self.consume_addr_spec()
        if not self.consume(">"):
            raise AddressSyntaxError("unclosed angle-addr")
        return ParsedAddress(display_name, spec)

    def consume_addr_spec(self) -> str:
        orig = self.pos
        try:
            return self._consume_addr_spec()
        except AddressSyntaxError:
            self.pos = orig
            raise

    def _consume_addr_spec(self) -> str:
        self.skip_space()
        if self.empty():
            raise AddressSyntaxError("no addr-spec")

        if self.peek() == '"':
            # any quoted-string failure leaves the local-part empty
            try:
                local_part = self.consume_quoted_string()
            except AddressSyntaxError:
                local_part = ""
            if not local_part:
                raise AddressSyntaxError("empty quoted-string in addr-spec")
        else:
            local_part = self.consume_atom(permissive=False)

        if not self.consume("@"):
            raise AddressSyntaxError("missing @ in addr-spec")

        self.skip_space()
        if self.empty():
            raise AddressSyntaxError("no domain in addr-spec")

        if self.peek() == "[":
            domain = self.consume_domain_literal()
        else:
            domain = self.consume_atom(permissive=False)

        return f"{local_part}@{domain}"

    def consume_phrase(self) -> str:
        words = []
        prev_encoded = False
        err = None
        while True:
            # obs-phrase allows CFWS between words
            if words and not self.skip_cfws():
                raise AddressSyntaxError("misformatted parenthetical comment")
            self.skip_space()
            if self.empty():
                break
            try:
                if self.peek() == '"':
                    word, encoded = self.consume_quoted_string(), False
                else:
                    word, encoded = _decode_encoded_word(self.consume_atom(permissive=True))
            except AddressSyntaxError as e:
                err = e
                break
            if prev_encoded and encoded:
                words[-1] += word
            else:
                words.append(word)
            prev_encoded = encoded

        if err is not None and not words:
            raise AddressSyntaxError(f"missing word in phrase: {err}") from err
        return " ".join(words)

    def consume_quoted_string(self) -> str:
        # s[pos] is the opening quote
        s = self.s
        out = []
        escaped = False
        i = self.pos + 1
        n = len(s)
        while True:
            if i >= n:
                raise AddressSyntaxError("unclosed quoted-string")
            ch = s[i]
            if escaped:
                if not _is_vchar(ch) and ch not in _WSP:
                    raise AddressSyntaxError(f"bad character in quoted-string: {ch!r}")
                out.append(ch)
                escaped = False
            elif ch == '"':
                break
            elif ch == "\\":
                escaped = True
            elif _is_vchar(ch) or ch in _WSP:
                out.append(ch)
            else:
                raise AddressSyntaxError(f"bad character in quoted-string: {ch!r}")
            i += 1
        self.pos = i + 1
        return "".join(out)

    def consume_atom(self, permissive: bool) -> str:
        """
        Dot-atom at the cursor. Permissive atoms are used for phrase words:
        they admit most specials and skip the dot placement checks.
        """
        m = (_PERMISSIVE_ATOM_RE if permissive else _ATOM_RE).match(self.s, self.pos)
        if m is None:
            raise AddressSyntaxError("invalid string")
        atom = m.group()
        self.pos = m.end()
        if not permissive:
            if atom.startswith("."):
                raise AddressSyntaxError("leading dot in atom")
            if ".." in atom:
                raise AddressSyntaxError("double dot in atom")
            if atom.endswith("."):
                raise AddressSyntaxError("trailing dot in atom")
        return atom

    def consume_domain_literal(self) -> str:
        if not self.consume("["):
            raise AddressSyntaxError('missing "[" in domain-literal')
        s = self.s
        start = i = self.pos
        n = len(s)
        while True:
            if i >= n:
                raise AddressSyntaxError("unclosed domain-literal")
            ch = s[i]
            if ch == "]":
                break
            if not _DTEXT_RE.match(ch):
                raise AddressSyntaxError(f"bad character in domain-literal: {ch!r}")
            i += 1
        dtext = s[start:i]
        self.pos = i + 1
        try:
            ipaddress.ip_address(dtext)
        except ValueError:
            raise AddressSyntaxError(f"invalid IP address in domain-literal: {dtext!r}") from None
        return f"[{dtext}]"

    def consume_display_name_comment(self) -> str:
        if not self.consume("("):
            raise AddressSyntaxError("comment does not start with (")
        comment, ok = self.consume_comment()
        if not ok:
            raise AddressSyntaxError("misformatted parenthetical comment")
        words = [w for w in re.split(r"[ \t]+", comment) if w]
        return " ".join(_decode_encoded_word(w)[0] for w in words)

    def consume_comment(self) -> tuple[str, bool]:
        # the opening '(' is already consumed
        depth = 1
        out = []
        s = self.s
        i = self.pos
        n = len(s)
        while i < n and depth:
            if s[i] == "\\" and i + 1 < n:
                i += 1
            elif s[i] == "(":
                depth += 1
            elif s[i] == ")":
                depth -= 1
            if depth:
                out.append(s[i])
            i += 1
        self.pos = i
        return "".join(out), depth == 0


def _decode_encoded_word(word: str) -> tuple[str, bool]:
    """
    Decode an RFC 2047 encoded-word. Anything that is not a well formed
    encoded-word is returned untouched; an unknown charset is an error.
    """
    if not _ENCODED_WORD_RE.fullmatch(word):
        return word, False
    try:
        [(raw, charset)] = decode_header(word)
    except (HeaderParseError, ValueError):
        return word, False
    if charset is None or isinstance(raw, str):
        return word, False
    try:
        return raw.decode(charset), True
    except LookupError:
        raise AddressSyntaxError(f"charset not supported: {charset!r}") from None
    except UnicodeError:
        return word, False


def parse_address(address: str) -> ParsedAddress:
    """
    Parse a single RFC 5322 address such as ``"Barry Gibbs" <bg@example.com>``
    or ``bg@example.com``.

    Raises AddressSyntaxError with a short human readable message when the
    input is not an address.
    """
    if not isinstance(address, str):
        raise TypeError(f"address must be str, got {type(address).__name__}")
    return _AddressScanner(address).parse_single_address()
