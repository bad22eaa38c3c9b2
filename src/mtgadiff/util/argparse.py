#!/usr/bin/env python3

import argparse
import pathlib

import yaml

from mtgadiff.config import PatchFormat


class ValidFile:
    """Filesystem path that exists"""

    def __new__(cls, string) -> pathlib.Path:  # type: ignore
        p = pathlib.Path(string)
        if p.exists():
            return p
        else:
            raise argparse.ArgumentTypeError(f"{string} does not exist")


class ValidFormat:
    """YAML file describing a patch file format"""

    def __new__(cls, string) -> PatchFormat:  # type: ignore
        p = ValidFile(string)
        try:
            return PatchFormat.from_yaml(p)
        except (yaml.YAMLError, TypeError, ValueError) as e:
            raise argparse.ArgumentTypeError(f"{string} is not a valid patch format ({e})") from None
