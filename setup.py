# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

import setuptools

setuptools.setup(
    name="irgen",
    description="Register map generator: xlsx register descriptions to IP-XACT, RegVue, C, UVM, SystemVerilog and HTML",
    use_scm_version={"fallback_version": "0.1.0"},
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "": ["*.mako"],
        "irgen.backends.templates": ["builtin/*.mako"]
    },
    python_requires=">=3.9",
    setup_requires=["setuptools_scm"],
    install_requires=[
        "mako",
        "pyyaml",
        "pandas",
        "openpyxl"
    ],
    extras_require={
        "test": ["pytest"]
    },
    entry_points={
        "console_scripts": [
            "irgen-load=irgen.frontends.excel.loader:main",
            "irgen-export=irgen.backends.export:main"
        ]
    },
    zip_safe=False
)
