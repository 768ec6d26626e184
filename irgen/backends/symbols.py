# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Symbols declared by the bundled C header, UVM RAL and SystemVerilog RTL
templates, and checks that no two model elements declare the same symbol.

The templates build symbols by joining element names with ``_``, the C header
also upper-cases them. Names which are fine on their own can therefore collide:
register ``A`` with field ``B_C`` and register ``A_B`` with field ``C`` both
declare ``A_B_C_q`` in the RTL, fields ``en`` and ``EN`` both define
``..._EN_SHIFT`` in the C header.

Every symbol generator yields ``(scope, symbol, owner)`` tuples. ``scope`` is the
namespace the symbol lives in ("" for file level), ``owner`` the dotted path of
the element declaring it, the VLNV for the component itself.
"""

from typing import Iterable, Iterator, Tuple

from .. import ConversionError
from ..metamodel.base import AccessType, Component

Symbol = Tuple[str, str, str]

C_COMPONENT_SUFFIXES = ("REGS_H", "REG32", "FIELD_GET", "FIELD_SET")
C_BLOCK_SUFFIXES = ("BASE_ADDR", "RANGE")
C_REGISTER_SUFFIXES = ("OFFSET", "ADDR", "RESET")
C_FIELD_SUFFIXES = ("SHIFT", "WIDTH", "MASK", "RESET")

C_ACCESSOR_MAX_SIZE = 32
"""Registers up to this width get a ``_REG`` accessor macro."""

SV_MODULE_SYMBOLS = ("ADDR_WIDTH", "DATA_WIDTH", "clk", "rst_n", "req", "we", "addr", "wdata", "rdata")

def c_header_symbols(compo: Component) -> Iterator[Symbol]:
	prefix = compo.name.upper()
	for suffix in C_COMPONENT_SUFFIXES:
		yield "", f"{prefix}_{suffix}", compo.vlnv

	for blk in compo.blocks:
		blk_prefix = f"{prefix}_{blk.name.upper()}"
		for suffix in C_BLOCK_SUFFIXES:
			yield "", f"{blk_prefix}_{suffix}", blk.name

		for reg in blk.registers:
			reg_path = f"{blk.name}.{reg.name}"
			reg_prefix = f"{blk_prefix}_{reg.name.upper()}"
			for suffix in C_REGISTER_SUFFIXES:
				yield "", f"{reg_prefix}_{suffix}", reg_path
			if reg.size <= C_ACCESSOR_MAX_SIZE:
				yield "", f"{reg_prefix}_REG", reg_path

			for field in reg.fields:
				field_path = f"{reg_path}.{field.name}"
				field_prefix = f"{reg_prefix}_{field.name.upper()}"
				for suffix in C_FIELD_SUFFIXES:
					yield "", f"{field_prefix}_{suffix}", field_path
				yield "", f"{field_prefix}_ACCESS_{field.attr.name}", field_path

def sv_rtl_symbols(compo: Component) -> Iterator[Symbol]:
	for blk in compo.blocks:
		module = f"{compo.name}_{blk.name}_regs"
		yield "", module, blk.name
		for symbol in SV_MODULE_SYMBOLS:
			yield module, symbol, blk.name

		for reg in blk.registers:
			reg_path = f"{blk.name}.{reg.name}"
			for symbol in (f"ADDR_{reg.name}", f"wr_{reg.name}", f"rd_{reg.name}"):
				yield module, symbol, reg_path

			for field in reg.fields:
				field_path = f"{reg_path}.{field.name}"
				sig = f"{reg.name}_{field.name}"
				if field.attr is AccessType.RO:
					yield module, f"{sig}_i", field_path
					continue
				yield module, f"{sig}_q", field_path
				yield module, f"{sig}_o", field_path
				if field.attr in (AccessType.RC, AccessType.W1C):
					yield module, f"{sig}_set_i", field_path
				elif field.attr is AccessType.W1S:
					yield module, f"{sig}_clr_i", field_path

def uvm_ral_symbols(compo: Component) -> Iterator[Symbol]:
	yield "", f"{compo.name}_reg_block", compo.vlnv
	for blk in compo.blocks:
		yield "", f"{compo.name}_{blk.name}_block", blk.name
		for reg in blk.registers:
			yield "", f"{compo.name}_{blk.name}_{reg.name}_reg", f"{blk.name}.{reg.name}"

def check_unique(kind: str, symbols: Iterable[Symbol]):
	"""Raise a ConversionError if two different elements declare the same symbol in
	the same scope.
	"""

	owners = {}
	for scope, symbol, owner in symbols:
		other = owners.setdefault((scope, symbol), owner)
		if other != owner:
			where = f" in {scope}" if scope else ""
			raise ConversionError(f"{kind}: {other} and {owner} both declare {symbol}{where}")

def check_c_header(compo: Component):
	check_unique("C header", c_header_symbols(compo))

def check_sv_rtl(compo: Component):
	check_unique("SystemVerilog RTL", sv_rtl_symbols(compo))

def check_uvm_ral(compo: Component):
	check_unique("UVM RAL", uvm_ral_symbols(compo))
