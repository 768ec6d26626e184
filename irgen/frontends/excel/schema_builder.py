# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Assemble an irgen :class:`~irgen.metamodel.base.Component` from the frames of a workbook.

Building runs in three phases over a pool of not yet consumed sheets:

1. ``version`` gives vendor, library, name and version of the component,
2. ``address_map`` gives the list of blocks,
3. the sheet named after each block gives its registers.

Every sheet is taken from the pool at most once. A sheet missing from the pool
raises :class:`~irgen.MissingSheetError`, a sheet that is present but can not be
used raises a :class:`~irgen.MalformedSheetError`.
"""

import dataclasses
import logging
from typing import Dict, List

import pandas as pd

from ... import (CellValueError, MalformedSheetError, MissingSheetError,
                 SchemaValidationError)
from ...metamodel.base import Block, Component, Register
from ...metamodel.identifiers import identifier_problem
from .register_parser import FIRST_DATA_ROW, parse_registers
from .values import cell_text, is_blank, parse_int

logger = logging.getLogger("schema_builder")

VERSION_SHEET = "version"
ADDRESS_MAP_SHEET = "address_map"

VERSION_COLUMNS = ("vendor", "library", "name", "version")
ADDRESS_MAP_COLUMNS = ("name", "offset", "range", "size")

class SheetPool:
	"""The sheets of a workbook which have not been consumed yet."""

	def __init__(self, frames: Dict[str, pd.DataFrame]):
		self._remaining = dict(frames)

	def take(self, name: str) -> pd.DataFrame:
		"""Remove and return the frame of sheet `name`."""

		try:
			return self._remaining.pop(name)
		except KeyError:
			raise MissingSheetError(name) from None

	def __contains__(self, name) -> bool:
		return name in self._remaining

	@property
	def remaining(self) -> "list[str]":
		return list(self._remaining)

@dataclasses.dataclass(frozen=True)
class ComponentHeader:
	vendor: str
	library: str
	name: str
	version: str

@dataclasses.dataclass(frozen=True)
class BlockRow:
	name: str
	offset: int
	range: int
	size: int
	row: int

def check_columns(df: pd.DataFrame, sheet: str, columns):
	missing = [col for col in columns if col not in df.columns]
	if missing:
		raise MalformedSheetError(sheet, f"missing column(s): {', '.join(missing)}")

def data_rows(df: pd.DataFrame):
	"""Yield (spreadsheet row number, row) for every row which is not completely empty."""

	for row_no, (_, row) in enumerate(df.iterrows(), start=FIRST_DATA_ROW):
		if all(is_blank(val) for val in row.values):
			continue
		yield row_no, row

def read_int(row, col: str, sheet: str, row_no: int) -> int:
	try:
		return parse_int(row.get(col))
	except ValueError as e:
		raise CellValueError(sheet, col, row_no, row.get(col), str(e)) from e

def read_version(df: pd.DataFrame) -> ComponentHeader:
	"""Phase 1: read the single row of the version sheet."""

	check_columns(df, VERSION_SHEET, VERSION_COLUMNS)
	rows = list(data_rows(df))
	if len(rows) != 1:
		raise MalformedSheetError(VERSION_SHEET, f"expected exactly one data row, found {len(rows)}")

	row_no, row = rows[0]
	values = {}
	for col in VERSION_COLUMNS:
		values[col] = cell_text(row.get(col))
		if not values[col]:
			raise CellValueError(VERSION_SHEET, col, row_no, row.get(col), "empty cell")

	problem = identifier_problem(values["name"])
	if problem:
		raise SchemaValidationError(VERSION_SHEET, f"component name {values['name']!r}: {problem}")

	return ComponentHeader(**values)

def read_address_map(df: pd.DataFrame) -> List[BlockRow]:
	"""Phase 2: read the block rows of the address map."""

	check_columns(df, ADDRESS_MAP_SHEET, ADDRESS_MAP_COLUMNS)

	blocks = []
	seen = {}
	for row_no, row in data_rows(df):
		name = cell_text(row.get("name"))
		if not name:
			raise CellValueError(ADDRESS_MAP_SHEET, "name", row_no, row.get("name"), "block name missing")

		problem = identifier_problem(name)
		if problem:
			raise SchemaValidationError(ADDRESS_MAP_SHEET, f"row {row_no}: block name {name!r}: {problem}")
		if name in seen:
			raise SchemaValidationError(ADDRESS_MAP_SHEET, f"row {row_no}: block {name} already defined in row {seen[name]}")
		seen[name] = row_no

		blk = BlockRow(
			name=name,
			offset=read_int(row, "offset", ADDRESS_MAP_SHEET, row_no),
			range=read_int(row, "range", ADDRESS_MAP_SHEET, row_no),
			size=read_int(row, "size", ADDRESS_MAP_SHEET, row_no),
			row=row_no
		)
		if blk.range == 0:
			raise CellValueError(ADDRESS_MAP_SHEET, "range", row_no, row.get("range"), "block range must be positive")
		if blk.size == 0:
			raise CellValueError(ADDRESS_MAP_SHEET, "size", row_no, row.get("size"), "block size must be positive")

		blocks.append(blk)

	if not blocks:
		logger.warning("address map does not contain any blocks")

	return blocks

def check_registers(blk: BlockRow, registers: "list[Register]"):
	"""Check register names, widths and offsets of a block against each other and the block."""

	names = set()
	offsets = {}
	for reg in registers:
		problem = identifier_problem(reg.name)
		if problem:
			raise SchemaValidationError(blk.name, f"register name {reg.name!r}: {problem}")
		if reg.name in names:
			raise SchemaValidationError(blk.name, f"duplicate register {reg.name}")
		names.add(reg.name)

		if reg.size > blk.size:
			raise SchemaValidationError(blk.name, f"register {reg.name} is {reg.size} bits wide, the block data width is {blk.size} bits")
		if reg.offset >= blk.range:
			raise SchemaValidationError(blk.name, f"register {reg.name} offset {reg.offset:#x} is outside of the block range {blk.range:#x}")
		if reg.offset in offsets:
			raise SchemaValidationError(blk.name, f"registers {offsets[reg.offset]} and {reg.name} share offset {reg.offset:#x}")
		offsets[reg.offset] = reg.name

def build_block(blk: BlockRow, df: pd.DataFrame) -> Block:
	"""Phase 3: build one block from its sheet."""

	logger.debug("building block %s", blk.name)

	registers = parse_registers(df, blk.name)
	if not registers:
		logger.warning("block %s has no registers", blk.name)
	check_registers(blk, registers)

	return Block(blk.name, blk.offset, blk.range, blk.size, tuple(registers))

def build_component(frames: Dict[str, pd.DataFrame]) -> Component:
	"""Build and validate a component from a dict of sheet name to frame."""

	pool = SheetPool(frames)

	logger.info("reading component version")
	header = read_version(pool.take(VERSION_SHEET))

	logger.info("reading address map")
	block_rows = read_address_map(pool.take(ADDRESS_MAP_SHEET))

	blocks = []
	for blk in block_rows:
		logger.info("reading block %s", blk.name)
		blocks.append(build_block(blk, pool.take(blk.name)))

	if pool.remaining:
		logger.debug("unused sheets: %s", ", ".join(pool.remaining))

	return Component(header.vendor, header.library, header.name, header.version, tuple(blocks))
