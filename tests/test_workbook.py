import sys

import openpyxl
import pytest

from irgen import MissingSheetError, WorkbookError
from irgen.frontends.excel import loader
from irgen.frontends.excel.workbook import read_workbook


def test_sheets_and_columns(make_workbook):
	"""Testing that every sheet is read and header names are normalized"""
	path = make_workbook({
		"version": [[" Vendor", "LIBRARY ", "Name", "version"], ["acme", "io", "uart0", "1.0"]],
		"notes": [["text"], ["not a register sheet"]],
	})
	frames = read_workbook(path)

	assert sorted(frames) == ["notes", "version"]
	assert list(frames["version"].columns) == ["vendor", "library", "name", "version"]
	assert frames["version"].iloc[0]["name"] == "uart0"


def test_missing_file(tmp_path):
	"""Testing that a missing workbook raises a WorkbookError"""
	with pytest.raises(WorkbookError) as excinfo:
		read_workbook(tmp_path / "missing.xlsx")
	assert isinstance(excinfo.value, OSError)


def test_not_a_workbook(tmp_path):
	"""Testing that a file which is not a workbook raises a WorkbookError"""
	path = tmp_path / "fake.xlsx"
	path.write_text("name,offset\n", encoding="utf-8")

	with pytest.raises(WorkbookError):
		read_workbook(path)


def test_load_missing_sheet(make_workbook, uart_sheets):
	"""Testing that the loader reports absent sheets by key"""
	del uart_sheets["address_map"]

	with pytest.raises(MissingSheetError) as excinfo:
		loader.load_excel(make_workbook(uart_sheets))
	assert excinfo.value.key == "address_map"


def test_load_cli(make_workbook, uart_sheets, monkeypatch, capsys):
	"""Testing the irgen-load summary output"""
	path = make_workbook(uart_sheets)
	monkeypatch.setattr(sys, "argv", ["irgen-load", str(path)])

	loader.main()

	out = capsys.readouterr().out
	assert f"Loaded: {path} (sheets: 3)" in out
	assert "acme:io:uart0:1.0" in out
	assert "registers: 1, fields: 2" in out


def test_load_cli_failure(tmp_path, monkeypatch):
	"""Testing that irgen-load exits with 1 on errors"""
	monkeypatch.setattr(sys, "argv", ["irgen-load", str(tmp_path / "missing.xlsx")])

	with pytest.raises(SystemExit) as excinfo:
		loader.main()
	assert excinfo.value.code == 1


@pytest.mark.parametrize("value, number_format, text", [
	(1.0, "0.0", "1.0"),
	(1.1, "0.00", "1.10"),
	(1.5, "General", "1.5"),
	(2, "General", "2"),
	("1.0", "General", "1.0"),
])
def test_numeric_version_cell(make_workbook, uart_sheets, value, number_format, text):
	"""Testing that a numeric version cell keeps the text the spreadsheet displays"""
	uart_sheets["version"][1][3] = value
	path = make_workbook(uart_sheets)
	wb = openpyxl.load_workbook(path)
	wb["version"]["D2"].number_format = number_format
	wb.save(path)

	result = loader.load_excel(path)

	assert result.component.version == text
	assert result.component.vlnv == f"acme:io:uart0:{text}"


def test_text_sheets(make_workbook):
	"""Testing that text sheets hold strings and None for empty cells"""
	path = make_workbook({
		"version": [["Vendor", "library", "name", "version"], ["acme", None, "uart0", 3]],
		"ctrl": [["name", "size"], ["CR", 32]],
	})
	frames = read_workbook(path, text_sheets=("version",))

	row = frames["version"].iloc[0]
	assert list(frames["version"].columns) == ["vendor", "library", "name", "version"]
	assert row["version"] == "3"
	assert row["library"] is None
	assert frames["ctrl"].iloc[0]["size"] == 32
