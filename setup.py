#!/usr/bin/env python3

import setuptools

VERSION = "0.0.1"
DESCRIPTION = "MTGADIFF binary patch utility"
LONG_DESCRIPTION = (
    "Generate, store and apply checksum verified binary patches between two files"
)

setuptools.setup(
    name="mtgadiff",
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        "argcomplete",
        "attrs",
        "colorama",
        "pyyaml",
        "rich",
        "tabulate",
        "typing_extensions",
    ],
    extras_require={"test": ["pytest", "tox"]},
    python_requires=">=3.10",
    entry_points={"console_scripts": ("mtgadiff = mtgadiff.app.main:main",)},
    zip_safe=False,
)
