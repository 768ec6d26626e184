import pandas as pd
import pytest

from irgen import (BitRangeError, CellValueError, MalformedSheetError,
                   SchemaValidationError)
from irgen.frontends.excel.register_parser import COLUMNS, parse_registers
from irgen.metamodel.base import AccessType


def block_frame(*rows):
	return pd.DataFrame(list(rows), columns=list(COLUMNS))


REG_CR = ["CR", "0x0", 32, None, None, None, None]
BLANK = [None] * 7


def test_fields_sorted_by_offset():
	"""Testing that fields are ordered by ascending bit offset"""
	df = block_frame(
		REG_CR,
		["MODE", 1, None, 2, "RW", 0, None],
		["EN", 0, None, 1, "RW", 0, "Enable"],
	)
	regs = parse_registers(df, "ctrl")

	assert len(regs) == 1
	assert regs[0].name == "CR"
	assert regs[0].size == 32
	assert [f.name for f in regs[0].fields] == ["EN", "MODE"]
	assert regs[0].fields[0].desc == "Enable"
	assert regs[0].fields[1].width == 2


def test_blank_rows_keep_register():
	"""Testing that blank rows do not end the current register"""
	df = block_frame(
		REG_CR,
		["EN", 0, None, 1, "RW", 0, None],
		BLANK,
		["MODE", 1, None, 2, "RW", 0, None],
		BLANK,
		["SR", "0x4", 32, None, None, None, None],
		["RXNE", "[0]", None, None, "RO", None, None],
	)
	regs = parse_registers(df, "ctrl")

	assert [r.name for r in regs] == ["CR", "SR"]
	assert [f.name for f in regs[0].fields] == ["EN", "MODE"]
	assert regs[1].offset == 4
	assert regs[1].fields[0].width == 1
	assert regs[1].fields[0].attr is AccessType.RO


def test_bit_range_and_reset_literals():
	"""Testing fields given by bit ranges and Verilog reset literals"""
	df = block_frame(
		REG_CR,
		["DIV", "[15:8]", None, None, "W", "8'h1A", None],
		["LOW", "3:0", None, 4, "rw", "0b1010", None],
	)
	reg = parse_registers(df, "ctrl")[0]

	assert [(f.name, f.offset, f.width) for f in reg.fields] == [("LOW", 0, 4), ("DIV", 8, 8)]
	assert reg.fields[1].attr is AccessType.WO
	assert reg.fields[1].reset == 0x1a
	assert reg.reset == 0x1a0a


def test_description_continuation():
	"""Testing that a row holding only a description extends the previous field"""
	df = block_frame(
		REG_CR,
		["EN", 0, None, 1, "RW", 0, "Enable the UART."],
		[None, None, None, None, None, None, "Write 0 to stop."],
	)
	field = parse_registers(df, "ctrl")[0].fields[0]

	assert field.desc == "Enable the UART.\nWrite 0 to stop."


def test_field_before_register():
	"""Testing that a field needs a preceding register row"""
	df = block_frame(["EN", 0, None, 1, "RW", 0, None])

	with pytest.raises(MalformedSheetError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.sheet == "ctrl"


def test_unclassifiable_row():
	"""Testing that a row without size and without field columns is rejected"""
	df = block_frame(REG_CR, ["EN", 0, None, None, None, None, None])

	with pytest.raises(MalformedSheetError):
		parse_registers(df, "ctrl")


def test_bad_cell_names_column_and_row():
	"""Testing that unparseable cells report sheet, column and spreadsheet row"""
	df = block_frame(
		REG_CR,
		["EN", 0, None, 1, "RW", "0xZZ", None],
	)

	with pytest.raises(CellValueError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.sheet == "ctrl"
	assert excinfo.value.column == "reset"
	assert excinfo.value.row == 3


def test_reset_must_fit_width():
	"""Testing that a reset value wider than the field is rejected"""
	df = block_frame(REG_CR, ["MODE", 1, None, 2, "RW", 4, None])

	with pytest.raises(CellValueError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.column == "reset"


def test_width_disagrees_with_range():
	"""Testing that an explicit width must match the bit range"""
	df = block_frame(REG_CR, ["LOW", "[3:0]", None, 3, "RW", 0, None])

	with pytest.raises(CellValueError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.column == "width"


def test_unknown_access():
	"""Testing that unknown access tokens are rejected"""
	df = block_frame(REG_CR, ["EN", 0, None, 1, "maybe", 0, None])

	with pytest.raises(CellValueError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.column == "attr"


def test_overlapping_fields():
	"""Testing that overlapping fields name the register and both fields"""
	df = block_frame(
		REG_CR,
		["EN", 0, None, 2, "RW", 0, None],
		["MODE", 1, None, 2, "RW", 0, None],
	)

	with pytest.raises(BitRangeError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.register == "CR"
	assert excinfo.value.fields == ("EN", "MODE")


def test_overlap_with_wide_earlier_field():
	"""Testing overlap detection against a wide field which starts further down"""
	df = block_frame(
		REG_CR,
		["WIDE", "[15:0]", None, None, "RW", 0, None],
		["A", 4, None, 1, "RW", 0, None],
		["B", 2, None, 1, "RW", 0, None],
	)

	with pytest.raises(BitRangeError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.fields == ("WIDE", "B")


def test_field_exceeds_register():
	"""Testing that fields must stay inside the register width"""
	df = block_frame(
		["CR", "0x0", 8, None, None, None, None],
		["DATA", "[8:1]", None, None, "RW", 0, None],
	)

	with pytest.raises(BitRangeError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.fields == ("DATA",)


def test_duplicate_field():
	"""Testing that field names are unique within a register"""
	df = block_frame(
		REG_CR,
		["EN", 0, None, 1, "RW", 0, None],
		["EN", 1, None, 1, "RW", 0, None],
	)

	with pytest.raises(SchemaValidationError):
		parse_registers(df, "ctrl")


def test_keyword_field_name():
	"""Testing that field names must be usable as C and SystemVerilog identifiers"""
	df = block_frame(REG_CR, ["int", 0, None, 1, "RW", 0, None])

	with pytest.raises(SchemaValidationError):
		parse_registers(df, "ctrl")


def test_missing_column():
	"""Testing that block sheets need the name, offset and size columns"""
	df = pd.DataFrame([["CR", "0x0"]], columns=["name", "offset"])

	with pytest.raises(MalformedSheetError):
		parse_registers(df, "ctrl")


def test_bit_range_or_reset_makes_a_field():
	"""Testing that a bit range or a reset value without width and attr is a field"""
	df = block_frame(
		REG_CR,
		["EN", "[0]", None, None, None, 0, None],
		["MODE", "[2:1]", None, None, None, None, None],
		["LOOP", 3, None, None, None, 1, None],
	)

	with pytest.raises(CellValueError) as excinfo:
		parse_registers(df, "ctrl")
	assert excinfo.value.column == "width"
	assert excinfo.value.row == 5

	reg = parse_registers(df.iloc[:3], "ctrl")[0]
	assert [(f.name, f.offset, f.width, f.reset) for f in reg.fields] == [("EN", 0, 1, 0), ("MODE", 1, 2, 0)]
	assert all(f.attr is AccessType.RW for f in reg.fields)


def test_register_row_with_field_columns():
	"""Testing that a row with a register size and field columns is rejected"""
	df = block_frame(["CR", "0x0", 32, 1, "RW", None, None])

	with pytest.raises(MalformedSheetError):
		parse_registers(df, "ctrl")
