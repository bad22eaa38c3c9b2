#!/usr/bin/env python3

"""Generate a patch file from two binary files"""

import pathlib

from rich.status import Status

from mtgadiff.apply import PatchApplier
from mtgadiff.codec import PatchCodec
from mtgadiff.commands import MtgaDiffCommand
from mtgadiff.diff import DiffEngine
from mtgadiff.errors import ValidationError
from mtgadiff.util.argparse import ValidFile
from mtgadiff.util.console import Console


class SubCommand(MtgaDiffCommand):
    NAME = "create"
    HELP = "Generate a patch file"
    DESCRIPTION = "Generate a patch file that transforms the original file into the new file"

    def __init__(self, args):
        self._original = args.original
        self._new = args.new
        self._patch = args.patch
        self._jobs: int = args.jobs
        self._codec = PatchCodec(args.format)

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("original", type=ValidFile, help="Original file to use as base image")
        parser.add_argument("new", type=ValidFile, help="New file that will be the result of applying the patch")
        parser.add_argument("patch", help="Output patch file name")
        parser.add_argument("--jobs", "-j", type=int, default=1, help="Number of threads comparing the files")
        cls.add_format_argument(parser)

    def run(self):
        with open(self._original, "rb") as f_orig:
            original = f_orig.read(-1)
        with open(self._new, "rb") as f_new:
            new = f_new.read(-1)

        with Status("Generating patch"):
            patch = DiffEngine.generate(original, new, max_workers=self._jobs)
            bin_patch = self._codec.encode(patch)

            # Validate that file can be reconstructed
            if PatchApplier.apply(original, self._codec.decode(bin_patch)) != new:
                raise ValidationError("Generated patch does not reconstruct the new file")

        with open(self._patch, "wb") as f_output:
            try:
                f_output.write(bin_patch)
                f_output.flush()
            except OSError:
                # Never leave a partial patch file behind
                f_output.close()
                pathlib.Path(self._patch).unlink(missing_ok=True)
                raise

        ratio = 100 * len(bin_patch) / len(new)
        print(f"Original File: {len(original):6d} bytes")
        print(f"     New File: {len(new):6d} bytes")
        print(f"   Patch File: {len(bin_patch):6d} bytes ({ratio:.2f}%) ({len(patch.items):5d} items)")
        Console.log_success(f"Successfully created patch file: {self._patch}")
