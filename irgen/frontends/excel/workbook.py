# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Read every sheet of a workbook into a pandas DataFrame."""

import logging
import numbers
import pathlib
import re
import zipfile
from typing import Dict, Iterable, Optional

import openpyxl
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ... import WorkbookError

logger = logging.getLogger("workbook")

SUFFIXES = (".xlsx", ".xlsm")

FIXED_FORMAT_RE = re.compile(r"[#,]*0+(?:\.(?P<decimals>0+))?\Z")
"""Number formats like `0`, `0.0` or `#,##0.00`."""

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
	"""Strip and lower-case the header names, so "Offset " and "offset" address the same column."""

	df.columns = [str(col).strip().lower() for col in df.columns]
	return df

def read_workbook(path: pathlib.Path, text_sheets: Iterable[str] = ()) -> Dict[str, pd.DataFrame]:
	"""Open the workbook at `path` and return a dict mapping sheet names to frames.

	The first row of each sheet is the header, pandas infers a type per column.
	Sheets named in `text_sheets` are read as text instead, each cell the way the
	spreadsheet displays it, so a version cell formatted as ``1.10`` stays "1.10".
	"""

	path = pathlib.Path(path)
	if path.suffix.lower() not in SUFFIXES:
		logger.warning("%s does not have a known workbook suffix, trying anyway", path.name)

	logger.info("reading workbook %s", path)

	try:
		sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
	except (OSError, ValueError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
		raise WorkbookError(f"can not read workbook {path}: {e}") from e

	frames = {}
	for sheet_name, df in sheets.items():
		sheet_name = str(sheet_name)
		if sheet_name in text_sheets:
			df = read_text_sheet(path, sheet_name)
		logger.debug("sheet %s: %d rows, columns %s", sheet_name, len(df), list(df.columns))
		frames[sheet_name] = normalize_columns(df)

	return frames

def display_text(cell) -> Optional[str]:
	"""Return the text of an openpyxl cell. Numbers with a fixed number of decimals
	in their number format are rendered with that many decimals.
	"""

	value = cell.value
	if value is None:
		return None
	if isinstance(value, numbers.Real) and not isinstance(value, bool):
		match = FIXED_FORMAT_RE.match(cell.number_format or "")
		if match:
			return f"{value:.{len(match.group('decimals') or '')}f}"
		return str(value)
	return str(value).strip()

def read_text_sheet(path: pathlib.Path, sheet: str) -> pd.DataFrame:
	"""Read sheet `sheet` with openpyxl into a frame of strings, empty cells as None."""

	try:
		wb = openpyxl.load_workbook(path, data_only=True)
	except (OSError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
		raise WorkbookError(f"can not read workbook {path}: {e}") from e

	try:
		rows = [[display_text(cell) for cell in row] for row in wb[sheet].iter_rows()]
	finally:
		wb.close()

	if not rows:
		return pd.DataFrame()

	header = [name if name is not None else f"unnamed: {i}" for i, name in enumerate(rows[0])]
	return pd.DataFrame(rows[1:], columns=header, dtype=object)
