#!/usr/bin/env python3

"""Apply a patch file to an original binary file"""

from rich.progress import Progress

from mtgadiff.apply import PatchApplier
from mtgadiff.codec import PatchCodec
from mtgadiff.commands import MtgaDiffCommand
from mtgadiff.util.argparse import ValidFile
from mtgadiff.util.console import Console


class SubCommand(MtgaDiffCommand):
    NAME = "patch"
    HELP = "Apply a patch file"
    DESCRIPTION = "Reconstruct the new file from the original file and a patch file"

    def __init__(self, args):
        self._original = args.original
        self._patch = args.patch
        self._output = args.output
        self._codec = PatchCodec(args.format)
        self.progress = Progress(*Progress.get_default_columns())
        self.task = None

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("original", type=ValidFile, help="Original file to use as base image")
        parser.add_argument("patch", type=ValidFile, help="Patch file to apply")
        parser.add_argument("output", help="File to write output to")
        cls.add_format_argument(parser)

    def progress_cb(self, description: str):
        def update(done: int, total: int):
            if self.task is None:
                self.task = self.progress.add_task(description, total=total)
            self.progress.update(self.task, completed=done)

        return update

    def finish_task(self):
        if self.task is not None:
            self.progress.remove_task(self.task)
            self.task = None

    def run(self):
        with open(self._original, "rb") as f_orig:
            original = f_orig.read(-1)

        with self.progress:
            with open(self._patch, "rb") as f_patch:
                patch = self._codec.read(f_patch, self.progress_cb("Reading patch"))
            self.finish_task()
            Console.log_info(f"Applying patch: {patch}")
            output = PatchApplier.apply(original, patch, self.progress_cb("Patching file"))
            self.finish_task()

        with open(self._output, "wb") as f_output:
            f_output.write(output)

        Console.log_success(f"Successfully applied patch to: {self._output}")
