from .address_parser import ParsedAddress, parse_address

__all__ = [
    'ParsedAddress',
    'parse_address',
]
