from __future__ import annotations

from enum import Enum


class RejectionReason(Enum):
    SURROUNDING_WHITESPACE = "surrounding_whitespace"
    ANGLE_BRACKETS_AROUND_ADDRESS = "angle_brackets_around_address"
    MALFORMED_ADDRESS = "malformed_address"
    NOT_STANDALONE_ADDRESS = "not_standalone_address"


class AddressSyntaxError(ValueError):
    """Raised by the grammar parser when the input is not an RFC 5322 address."""


class AddressError(ValueError):
    """
    Base class for every rejection reported by the validator.

    ``reason`` classifies the rejection; ``email`` is the input exactly as given.
    """

    reason: RejectionReason

    def __init__(self, message: str, email: str):
        super().__init__(message)
        self.email = email


class SurroundingWhitespaceError(AddressError):
    reason = RejectionReason.SURROUNDING_WHITESPACE

    def __init__(self, email: str):
        super().__init__("white space around email address", email)


class AngleBracketsError(AddressError):
    reason = RejectionReason.ANGLE_BRACKETS_AROUND_ADDRESS

    def __init__(self, email: str):
        super().__init__("angle brackets around email address", email)


class MalformedAddressError(AddressError):
    reason = RejectionReason.MALFORMED_ADDRESS

    def __init__(self, email: str, detail: str):
        super().__init__(f"failed to parse address: {detail}", email)
        # grammar parser message, verbatim
        self.detail = detail


class NotStandaloneAddressError(AddressError):
    reason = RejectionReason.NOT_STANDALONE_ADDRESS

    def __init__(self, email: str):
        super().__init__("not standalone email address", email)
