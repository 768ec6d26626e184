# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This is the spreadsheet frontend of irgen.

A register map workbook holds three kinds of sheets:

* ``version``: exactly one row with the vendor, library, name and version of the component.
* ``address_map``: one row per address block with its name, offset, range and size.
* one sheet per address block, named like the block, listing its registers and fields.

The workbook is read into one :class:`pandas.DataFrame` per sheet by
:mod:`~irgen.frontends.excel.workbook`, block sheets are split into registers and
fields by :mod:`~irgen.frontends.excel.register_parser` and the model is assembled
and validated by :mod:`~irgen.frontends.excel.schema_builder`. The main entry point
is :func:`irgen.frontends.excel.loader.load_excel`.
"""
