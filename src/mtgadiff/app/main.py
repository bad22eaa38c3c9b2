#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK

"""Binary patch utility (mtgadiff) main module"""

import argparse
import importlib
import pkgutil
import sys

import argcomplete

import mtgadiff.tools
from mtgadiff.commands import MtgaDiffCommand
from mtgadiff.errors import PatchError
from mtgadiff.util.console import Console


class MtgaDiffApp:
    """The mtgadiff 'application' object"""

    def __init__(self):
        self.parser = argparse.ArgumentParser("mtgadiff")
        # Load tools
        self._load_tools(self.parser)
        # Handle CLI tab completion
        argcomplete.autocomplete(self.parser)

    def run(self, argv):
        """Run the chosen subtool handler"""
        self.args = self.parser.parse_args(argv)

        tool = self.args.tool_class(self.args)
        tool.run()

    def _load_tools(self, parser: argparse.ArgumentParser):
        tools_parser = parser.add_subparsers(title="commands", metavar="<command>", required=True)

        # Iterate over tools
        for _, name, _ in pkgutil.walk_packages(mtgadiff.tools.__path__):
            full_name = f"{mtgadiff.tools.__name__}.{name}"
            module = importlib.import_module(full_name)

            # Add tool to parser
            tool_cls: MtgaDiffCommand = getattr(module, "SubCommand")
            parser = tools_parser.add_parser(
                tool_cls.NAME,
                help=tool_cls.HELP,
                description=tool_cls.DESCRIPTION,
                formatter_class=argparse.RawDescriptionHelpFormatter,
            )
            parser.set_defaults(tool_class=tool_cls)
            tool_cls.add_parser(parser)


def main(argv=None):
    """Create the MtgaDiffApp instance and let it run"""
    Console.init()
    app = MtgaDiffApp()
    try:
        app.run(sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        pass
    except (PatchError, OSError) as e:
        Console.log_error(f"Operation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
