# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This module contains various consumers of irgen models. Currently provided are:

* An IP-XACT (IEEE 1685-2014) writer, :mod:`irgen.backends.ipxact`.
* A RegVue JSON writer, :mod:`irgen.backends.regvue`.
* A mako based template engine generating C headers, UVM RAL packages,
  SystemVerilog register files and HTML reports, :mod:`irgen.backends.templates`.

All of them are driven by :mod:`irgen.backends.export`, which maps an export kind
to the backend producing it and writes the result next to an output path stem.
"""
