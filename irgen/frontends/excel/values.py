# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Parsers for the literals found in register map cells.

Cells come out of pandas either as numbers (int, float, numpy scalars), as
strings or as NaN for empty cells. All parse functions raise :class:`ValueError`
with a short reason, callers wrap it into a :class:`~irgen.CellValueError`
carrying the sheet, column and row.
"""

import numbers
import re
from typing import Optional, Tuple

import pandas as pd

from ...metamodel.base import AccessType

VERILOG_LITERAL_RE = re.compile(r"(?P<size>\d*)'(?P<base>[hdbo])(?P<digits>[0-9a-f_]+)\Z")
BIT_RANGE_RE = re.compile(r"\[?\s*(?P<msb>\d+)\s*(?::\s*(?P<lsb>\d+)\s*)?\]?\Z")

RADIX = {"h": 16, "d": 10, "b": 2, "o": 8}

ACCESS_TOKENS = {
	"rw": AccessType.RW,
	"r/w": AccessType.RW,
	"read-write": AccessType.RW,
	"read_write": AccessType.RW,
	"readwrite": AccessType.RW,
	"ro": AccessType.RO,
	"r": AccessType.RO,
	"read-only": AccessType.RO,
	"read_only": AccessType.RO,
	"readonly": AccessType.RO,
	"wo": AccessType.WO,
	"w": AccessType.WO,
	"write-only": AccessType.WO,
	"write_only": AccessType.WO,
	"writeonly": AccessType.WO,
	"rc": AccessType.RC,
	"roc": AccessType.RC,
	"clear-on-read": AccessType.RC,
	"clear_on_read": AccessType.RC,
	"read-clear": AccessType.RC,
	"w1c": AccessType.W1C,
	"rw1c": AccessType.W1C,
	"write-one-to-clear": AccessType.W1C,
	"w1s": AccessType.W1S,
	"rw1s": AccessType.W1S,
	"write-one-to-set": AccessType.W1S,
}

def is_blank(value) -> bool:
	if value is None:
		return True
	if isinstance(value, str):
		return not value.strip()
	try:
		return bool(pd.isna(value))
	except (TypeError, ValueError):
		return False

def is_bit_range(value) -> bool:
	"""Whether a position cell is written as a bit range (`[n]`, `[hi:lo]` or `hi:lo`)
	rather than as a plain bit index.
	"""

	return isinstance(value, str) and ("[" in value or ":" in value)

def cell_text(value) -> str:
	"""Return the cell as stripped text, empty cells as ""."""

	if is_blank(value):
		return ""
	if isinstance(value, str):
		return value.strip()
	if isinstance(value, numbers.Integral):
		return str(int(value))
	return str(value).strip()

def _integral(value) -> int:
	if isinstance(value, bool):
		raise ValueError("boolean is not a number")
	if isinstance(value, numbers.Integral):
		return int(value)
	if isinstance(value, numbers.Real):
		if float(value).is_integer():
			return int(value)
		raise ValueError("not an integer")
	raise ValueError("not a number")

def parse_int(value) -> int:
	"""Parse a `0x`-prefixed hexadecimal or a decimal literal."""

	if is_blank(value):
		raise ValueError("empty cell")
	if not isinstance(value, str):
		ret = _integral(value)
	else:
		text = value.strip().lower().replace("_", "")
		try:
			if text.startswith("0x"):
				ret = int(text[2:], 16)
			else:
				ret = int(text, 10)
		except ValueError as e:
			raise ValueError("expected hexadecimal (0x...) or decimal literal") from e

	if ret < 0:
		raise ValueError("negative value")
	return ret

def parse_reset(value, width: Optional[int] = None) -> int:
	"""Parse a reset value: hexadecimal (`0x`), binary (`0b`), octal (`0o`), decimal
	or Verilog sized literals like `4'hF`. An empty cell means zero. If `width` is
	given, the value must fit into that many bits.
	"""

	if is_blank(value):
		return 0

	if not isinstance(value, str):
		ret = _integral(value)
	else:
		text = value.strip().lower().replace(" ", "")
		match = VERILOG_LITERAL_RE.match(text)
		try:
			if match:
				ret = int(match.group("digits").replace("_", ""), RADIX[match.group("base")])
			elif text[:2] in ("0x", "0b", "0o"):
				ret = int(text.replace("_", ""), 0)
			else:
				ret = int(text.replace("_", ""), 10)
		except ValueError as e:
			raise ValueError("expected hexadecimal, binary, decimal or Verilog literal") from e

		if match and match.group("size") and ret >= 1 << int(match.group("size")):
			raise ValueError(f"value does not fit its {match.group('size')} bit literal size")

	if ret < 0:
		raise ValueError("negative value")
	if width is not None and ret >= 1 << width:
		raise ValueError(f"value does not fit into {width} bits")
	return ret

def parse_bit_position(value) -> Tuple[int, Optional[int]]:
	"""Parse a field bit position. Returns (lsb, width), width is None if the cell
	only holds the starting bit.

	Accepted: `3`, `"3"`, `"[3]"` (width 1), `"[7:4]"` and `"7:4"` (width 4).
	"""

	if is_blank(value):
		raise ValueError("empty cell")
	if not isinstance(value, str):
		lsb = _integral(value)
		if lsb < 0:
			raise ValueError("negative bit position")
		return lsb, None

	text = value.strip()
	match = BIT_RANGE_RE.match(text)
	if not match:
		raise ValueError("expected bit index or [msb:lsb] range")

	msb = int(match.group("msb"))
	if match.group("lsb") is None:
		if text.startswith("["):
			return msb, 1
		return msb, None

	lsb = int(match.group("lsb"))
	if msb < lsb:
		raise ValueError("msb is lower than lsb")
	return lsb, msb - lsb + 1

def parse_access(value) -> AccessType:
	"""Map an attribute token to its access kind, an empty cell means read-write."""

	if is_blank(value):
		return AccessType.RW
	token = str(value).strip().lower()
	try:
		return ACCESS_TOKENS[token]
	except KeyError as e:
		raise ValueError(f"unknown access type, expected one of {', '.join(t.name for t in AccessType)}") from e
