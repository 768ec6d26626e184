# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This is the RegVue backend of irgen. It flattens a component into a RegVue
register description document, where every block and register is an element keyed
by its dotted path.
"""

from .adapter import SCHEMA, serialize, to_regvue
