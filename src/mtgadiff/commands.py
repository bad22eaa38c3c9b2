#!/usr/bin/env python3

"""mtgadiff command parent class"""

import argparse

from mtgadiff.config import DEFAULT_FORMAT
from mtgadiff.util.argparse import ValidFormat


class MtgaDiffCommand:
    """mtgadiff command parent class"""

    NAME = "N/A"
    HELP = "N/A"
    DESCRIPTION = "N/A"

    @classmethod
    def add_parser(cls, parser: argparse.ArgumentParser):
        """Add arguments for sub-command"""

    @classmethod
    def add_format_argument(cls, parser: argparse.ArgumentParser):
        """Common patch format override argument"""
        parser.add_argument(
            "--format",
            type=ValidFormat,
            default=DEFAULT_FORMAT,
            help="YAML file overriding the patch magic and version",
        )

    def __init__(self, args: argparse.Namespace):
        pass

    def run(self):
        """Run the subcommand"""
        raise NotImplementedError
