# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This module contains the irgen metamodel classes a register map is built from.

The model is a plain tree: a :class:`~irgen.metamodel.base.Component` owns its
:class:`~irgen.metamodel.base.Block` objects, a block owns its
:class:`~irgen.metamodel.base.Register` objects and a register owns its
:class:`~irgen.metamodel.base.Field` objects. All classes are frozen dataclasses
holding tuples, so once a frontend returns a component it can be handed to any
number of backends (also from several threads) without copying.

Names in the model are used verbatim as C and SystemVerilog symbols by the
backends, :mod:`irgen.metamodel.identifiers` contains the checks for that.
"""

from .base import AccessType, Block, Component, Field, Register
