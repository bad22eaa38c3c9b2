#!/usr/bin/env python3

"""Display the contents of a patch file"""

import tabulate

from mtgadiff.codec import PatchCodec
from mtgadiff.commands import MtgaDiffCommand
from mtgadiff.util.argparse import ValidFile


class SubCommand(MtgaDiffCommand):
    NAME = "dump"
    HELP = "Dump patch file contents to terminal"
    DESCRIPTION = "Dump patch file header and items to terminal"

    def __init__(self, args):
        self._patch = args.patch
        self._limit: int | None = args.limit
        self._codec = PatchCodec(args.format)

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("patch", type=ValidFile, help="Patch file to dump")
        parser.add_argument("--limit", "-n", type=int, help="Maximum number of items to display")
        cls.add_format_argument(parser)

    def run(self):
        with open(self._patch, "rb") as f_patch:
            patch = self._codec.read(f_patch)

        print(f"       Format: {self._codec.fmt}")
        print(f"Original File: {patch.original_length:6d} bytes ({patch.original_checksum.hex()})")
        print(f"     New File: {patch.patched_length:6d} bytes ({patch.patched_checksum.hex()})")
        print(f"        Patch: {patch}")

        items = patch.items if self._limit is None else patch.items[: self._limit]
        if len(items) == 0:
            return

        table = []
        for idx, item in enumerate(items):
            table.append([idx, f"0x{item.offset:08x}", len(item.content), item.preview])

        print("")
        print(tabulate.tabulate(table, headers=["Index", "Offset", "Length", "Content"], tablefmt="simple"))
        if len(items) < len(patch.items):
            print(f"... {len(patch.items) - len(items)} more items")
