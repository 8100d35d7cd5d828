from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Tuple

from emailaddress.common.address_parser import ParsedAddress, parse_address
from emailaddress.common.errors import (
    AddressError,
    AddressSyntaxError,
    AngleBracketsError,
    MalformedAddressError,
    NotStandaloneAddressError,
    SurroundingWhitespaceError,
)

logger = logging.getLogger(__name__)

AddressParser = Callable[[str], ParsedAddress]


class AddressValidator:
    """
    Accepts bare ``local@domain`` strings only, on top of a grammar parser that
    also understands ``"Name" <local@domain>``.

    The policy is permissive: anything the grammar parser accepts as a
    standalone address is accepted, even where the RFCs are stricter.
    Input is never trimmed; callers that want trimming should strip first.
    """

    __slots__ = ("_parse_address",)

    def __init__(self, address_parser: AddressParser = parse_address):
        self._parse_address = address_parser

    def parse(self, email: str) -> Tuple[str, str]:
        """
        Split ``email`` into ``(local_part, domain)`` at its last '@'.

        Raises an AddressError subclass on the first rule the input breaks,
        checked in this order: surrounding white space, angle brackets around
        the whole string, grammar errors, presence of a display name.
        """
        if not isinstance(email, str):
            raise TypeError(f"email must be str, got {type(email).__name__}")

        if len(email.strip()) != len(email):
            raise self._logged(SurroundingWhitespaceError(email))

        # the grammar reads "<a@b>" as a name-addr with an empty name
        if email.startswith("<") and email.endswith(">"):
            raise self._logged(AngleBracketsError(email))

        try:
            addr = self._parse_address(email)
        except AddressSyntaxError as e:
            raise self._logged(MalformedAddressError(email, str(e))) from e

        if addr.display_name:
            raise self._logged(NotStandaloneAddressError(email))

        idx = email.rfind("@")
        if idx == -1:
            raise AssertionError(f"emailaddress: no '@' in accepted address {email!r}")

        return email[:idx], email[idx + 1:]

    def is_valid(self, email: str) -> bool:
        """True when ``parse`` would succeed."""
        try:
            self.parse(email)
        except AddressError:
            return False
        return True

    @staticmethod
    def _logged(err: AddressError) -> AddressError:
        logger.debug("rejected %r: %s (%s)", err.email, err, err.reason.value)
        return err


@lru_cache(maxsize=1)
def get_default_validator() -> AddressValidator:
    return AddressValidator()


def parse(email: str) -> Tuple[str, str]:
    """
    Parse an email address into its local-part and domain.

    Most callers will want to pass ``email.strip()``.
    """
    return get_default_validator().parse(email)


def is_valid(email: str) -> bool:
    """
    Report whether the email address is of valid format; shorthand for
    calling ``parse`` and checking that it raised no AddressError.

    Most callers will want to pass ``email.strip()``.
    """
    return get_default_validator().is_valid(email)
