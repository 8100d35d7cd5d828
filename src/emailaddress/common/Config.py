import logging
import os
from glob import glob
from typing import List

logger = logging.getLogger(__name__)


class Config:
    def __init__(self, args):
        # Input configurations
        self.addresses = list(args.addresses)
        self.input_files = Config.__prepare_input_files(args.input_files)
        self.unreadable_files = []

        # Processing options
        self.trim = args.trim

        # Output configurations
        self.quiet = args.quiet
        self.verbose = args.verbose

    def iter_addresses(self):
        for address in self.addresses:
            yield self.__prepare_address(address)
        for file_name in self.input_files:
            try:
                with open(file_name, encoding="utf-8") as f:
                    for line in f:
                        line = line.rstrip("\r\n")
                        if line:
                            yield self.__prepare_address(line)
            except (UnicodeDecodeError, OSError) as e:
                logger.error("cannot read %s: %s", file_name, e)
                self.unreadable_files.append(file_name)

    def __prepare_address(self, address: str) -> str:
        return address.strip() if self.trim else address

    @staticmethod
    def __prepare_input_files(input_files: List[str]):
        file_names = []
        for f in input_files:
            file_names += glob(f)
        file_names = set(file_names)
        return sorted(file for file in file_names if os.path.isfile(file))
