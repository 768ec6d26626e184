# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This module contains various producers of irgen models. Currently provided is:

* A loader for register map spreadsheets (``.xlsx``/``.xlsm``), see
  :mod:`irgen.frontends.excel`.
"""
