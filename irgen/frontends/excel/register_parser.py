# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Split the rows of a block sheet into registers and their fields.

A block sheet has the columns ``name, offset, size, width, attr, reset, desc``.
A register row fills in ``name``, ``offset`` (byte offset) and ``size`` (bits),
the rows below it until the next register row are its fields and fill in
``name``, ``offset`` (bit position), ``width``, ``attr``, ``reset`` and ``desc``.
Empty rows keep the current register, so fields of a register can be separated
by blank lines or merged cells.

A row is a field row if it fills in ``width``, ``attr`` or ``reset``, or gives its
``offset`` as a bit range. Field rows must leave ``size`` empty, a row with
``size`` and none of the field columns starts a register. A row holding nothing
but ``desc`` continues the description of the previous field.
"""

import dataclasses
import logging
from typing import List

import pandas as pd

from ... import BitRangeError, CellValueError, MalformedSheetError, SchemaValidationError
from ...metamodel.base import Field, Register
from ...metamodel.identifiers import identifier_problem
from .values import (cell_text, is_bit_range, is_blank, parse_access,
                     parse_bit_position, parse_int, parse_reset)

logger = logging.getLogger("register_parser")

COLUMNS = ("name", "offset", "size", "width", "attr", "reset", "desc")
REQUIRED_COLUMNS = ("name", "offset", "size")
FIELD_MARKERS = ("width", "attr", "reset")

FIRST_DATA_ROW = 2
"""Spreadsheet row number of the first frame row, row 1 is the header."""

@dataclasses.dataclass
class PendingRegister:
	"""A register row together with the field rows collected for it so far."""

	name: str
	offset: int
	size: int
	row: int
	fields: "list[Field]" = dataclasses.field(default_factory=list)

def parse_registers(df: pd.DataFrame, sheet: str) -> List[Register]:
	"""Parse the frame of block sheet `sheet` into an ordered list of registers.

	Registers keep their sheet order, the fields of each register are sorted by
	ascending bit offset. Raises CellValueError for unparseable cells,
	BitRangeError for overlapping or out of bounds fields and
	MalformedSheetError / SchemaValidationError for structural problems.
	"""

	missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
	if missing:
		raise MalformedSheetError(sheet, f"missing column(s): {', '.join(missing)}")

	pending: "list[PendingRegister]" = []
	current = None

	for row_no, (_, row) in enumerate(df.iterrows(), start=FIRST_DATA_ROW):
		cells = {col: row.get(col) for col in COLUMNS}

		if all(is_blank(val) for val in cells.values()):
			logger.debug("%s row %d: blank, keeping register context", sheet, row_no)
			continue

		if is_field_row(cells):
			if not is_blank(cells["size"]):
				raise MalformedSheetError(sheet, f"row {row_no}: both register size and field columns are filled")
			if current is None:
				raise MalformedSheetError(sheet, f"row {row_no}: field {cell_text(cells['name'])!r} precedes the first register")
			current.fields.append(parse_field(cells, sheet, row_no))

		elif not is_blank(cells["size"]):
			current = parse_register_row(cells, sheet, row_no)
			pending.append(current)
			logger.debug("%s row %d: register %s", sheet, row_no, current.name)

		elif all(is_blank(cells[col]) for col in COLUMNS if col != "desc") and current is not None and current.fields:
			# description wrapped into the next row
			last = current.fields[-1]
			current.fields[-1] = dataclasses.replace(last, desc=f"{last.desc}\n{cell_text(cells['desc'])}".strip())

		else:
			raise MalformedSheetError(sheet, f"row {row_no}: neither a register row (needs size) nor a field row (needs width, attr, reset or a bit range)")

	return [finish_register(reg, sheet) for reg in pending]

def is_field_row(cells: dict) -> bool:
	"""A field row fills in at least one field-only column, or gives its position as a bit range."""

	return any(not is_blank(cells[col]) for col in FIELD_MARKERS) or is_bit_range(cells["offset"])

def _cell(parse, cells, col, sheet, row_no, *args):
	try:
		return parse(cells[col], *args)
	except ValueError as e:
		raise CellValueError(sheet, col, row_no, cells[col], str(e)) from e

def parse_register_row(cells: dict, sheet: str, row_no: int) -> PendingRegister:
	name = cell_text(cells["name"])
	if not name:
		raise CellValueError(sheet, "name", row_no, cells["name"], "register name missing")

	offset = _cell(parse_int, cells, "offset", sheet, row_no)
	size = _cell(parse_int, cells, "size", sheet, row_no)
	if size == 0:
		raise CellValueError(sheet, "size", row_no, cells["size"], "register size must be positive")

	return PendingRegister(name, offset, size, row_no)

def parse_field(cells: dict, sheet: str, row_no: int) -> Field:
	name = cell_text(cells["name"])
	if not name:
		raise CellValueError(sheet, "name", row_no, cells["name"], "field name missing")

	lsb, pos_width = _cell(parse_bit_position, cells, "offset", sheet, row_no)

	if is_blank(cells["width"]):
		if pos_width is None:
			raise CellValueError(sheet, "width", row_no, cells["width"], "field width missing")
		width = pos_width
	else:
		width = _cell(parse_int, cells, "width", sheet, row_no)
		if pos_width is not None and width != pos_width:
			raise CellValueError(sheet, "width", row_no, cells["width"], f"bit position spans {pos_width} bits")

	if width == 0:
		raise CellValueError(sheet, "width", row_no, cells["width"], "field width must be positive")

	attr = _cell(parse_access, cells, "attr", sheet, row_no)
	reset = _cell(parse_reset, cells, "reset", sheet, row_no, width)

	return Field(name, lsb, width, attr, reset, cell_text(cells["desc"]))

def finish_register(reg: PendingRegister, sheet: str) -> Register:
	"""Sort the fields of `reg` and check them against each other and the register size."""

	fields = sorted(reg.fields, key=lambda f: f.offset)

	if not fields:
		logger.warning("%s: register %s has no fields", sheet, reg.name)

	seen = set()
	for field in fields:
		problem = identifier_problem(field.name)
		if problem:
			raise SchemaValidationError(sheet, f"register {reg.name}: field name {field.name!r}: {problem}")
		if field.name in seen:
			raise SchemaValidationError(sheet, f"register {reg.name}: duplicate field {field.name}")
		seen.add(field.name)

	highest = None
	for field in fields:
		if field.offset + field.width > reg.size:
			raise BitRangeError(sheet, reg.name, (field.name,),
				f"field {field.name} [{field.msb}:{field.offset}] exceeds the register width of {reg.size} bits")

		if highest is not None and highest.msb >= field.offset:
			raise BitRangeError(sheet, reg.name, (highest.name, field.name),
				f"fields {highest.name} [{highest.msb}:{highest.offset}] and {field.name} [{field.msb}:{field.offset}] overlap")

		if highest is None or field.msb > highest.msb:
			highest = field

	return Register(reg.name, reg.offset, reg.size, tuple(fields))
