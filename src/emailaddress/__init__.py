"""
Parse and validate standalone email addresses (``local@domain``, no display
name) without ever rejecting an address that is plausibly valid.
"""
from .common.errors import (
    AddressError,
    AddressSyntaxError,
    AngleBracketsError,
    MalformedAddressError,
    NotStandaloneAddressError,
    RejectionReason,
    SurroundingWhitespaceError,
)
from .validator import AddressValidator, get_default_validator, is_valid, parse

__all__ = [
    'AddressError',
    'AddressSyntaxError',
    'AddressValidator',
    'AngleBracketsError',
    'MalformedAddressError',
    'NotStandaloneAddressError',
    'RejectionReason',
    'SurroundingWhitespaceError',
    'get_default_validator',
    'is_valid',
    'parse',
]
