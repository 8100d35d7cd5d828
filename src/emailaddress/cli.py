import argparse
import logging
import sys

from emailaddress.common.Config import Config
from emailaddress.common.errors import AddressError
from emailaddress.validator import get_default_validator

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(prog="emailaddress",
                                     description="""Check that each string is a standalone email address and split it into local-part and domain.""",
                                     formatter_class=lambda prog: argparse.HelpFormatter(prog, max_help_position=80))

    parser.add_argument('addresses', metavar='<address>', nargs='*', type=str,
                        help='Email addresses to check.')

    parser.add_argument('-i', '--input', metavar='<file>', dest="input_files",
                        nargs='+', type=str, default=[],
                        help='Files holding one address per line.')

    parser.add_argument('--trim', action='store_true', dest="trim",
                        help='Strip surrounding white space before checking each address')

    parser.add_argument('-q', '--quiet', action='store_true', dest="quiet",
                        help='Print nothing, only set the exit status')

    parser.add_argument('-v', '--verbose', action='store_true', dest="verbose",
                        help='Enable debug logging')

    return parser.parse_args(argv)


def print_list_with_title(title: str, items: list, file=None):
    if items:
        file = file or sys.stderr
        print(title, file=file)
        for item in items:
            print(item, file=file)
        print(file=file)


def main(argv=None) -> int:
    # Config object stores all arguments parsed
    config = Config(parse_arguments(argv))

    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if not config.quiet:
        print_list_with_title("Files to be processed:", config.input_files)

    validator = get_default_validator()
    total = 0
    invalid = 0
    for address in config.iter_addresses():
        total += 1
        try:
            local_part, domain = validator.parse(address)
        except AddressError as e:
            invalid += 1
            if not config.quiet:
                print(f"invalid\t{e.reason.value}\t{e}")
            continue
        if not config.quiet:
            print(f"valid\t{local_part}\t{domain}")

    if config.unreadable_files:
        return 1

    if total == 0:
        logger.error("no addresses supplied")
        return 2

    logger.debug("checked %d addresses, %d invalid", total, invalid)
    return 1 if invalid else 0
