import openpyxl
import pytest

from irgen.backends.templates import reset_default_registry
from irgen.config import CONFIG_HOME_ENV
from irgen.metamodel.base import AccessType, Block, Component, Field, Register

BLOCK_HEADER = ["name", "offset", "size", "width", "attr", "reset", "desc"]

@pytest.fixture
def uart_sheets():
	"""Sheet contents of a small, valid register map workbook. The first row of
	each sheet is the header.
	"""

	return {
		"version": [
			["vendor", "library", "name", "version"],
			["acme", "io", "uart0", "1.0"],
		],
		"address_map": [
			["name", "offset", "range", "size"],
			["ctrl", "0x1000", "0x100", 32],
		],
		"ctrl": [
			BLOCK_HEADER,
			["CR", "0x0", 32, None, None, None, None],
			["EN", 0, None, 1, "RW", 0, "Enable the UART"],
			["MODE", 1, None, 2, "RW", 0, None],
		],
	}

@pytest.fixture
def make_workbook(tmp_path):
	"""Return a function writing a dict of sheet name to rows into an xlsx file."""

	def write(sheets, name="regs.xlsx"):
		wb = openpyxl.Workbook()
		wb.remove(wb.active)
		for sheet_name, rows in sheets.items():
			ws = wb.create_sheet(sheet_name)
			for row in rows:
				ws.append(row)
		path = tmp_path / name
		wb.save(path)
		return path

	return write

@pytest.fixture
def uart_component():
	status = Register("SR", 0x4, 32, (
		Field("RXNE", 0, 1, AccessType.RO, 0, "Receive buffer not empty"),
		Field("OVR", 1, 1, AccessType.W1C, 0, "Overrun"),
		Field("BRK", 2, 1, AccessType.RC, 0),
		Field("TXE", 3, 1, AccessType.W1S, 1),
	))
	ctrl = Register("CR", 0x0, 32, (
		Field("EN", 0, 1, AccessType.RW, 0, "Enable the UART"),
		Field("MODE", 1, 2, AccessType.RW, 2),
		Field("DIV", 8, 8, AccessType.WO, 0x1a),
	))
	data = Register("DR", 0x8, 32, (
		Field("DATA", 0, 8, AccessType.RW, 0),
	))
	return Component("acme", "io", "uart0", "1.0", (
		Block("ctrl", 0x1000, 0x100, 32, (ctrl, status)),
		Block("fifo", 0x2000, 0x10, 32, (data,)),
	))

@pytest.fixture
def config_home(tmp_path, monkeypatch):
	"""Point the irgen config directory to an empty temporary directory and start
	with a fresh default template registry.
	"""

	home = tmp_path / "config"
	monkeypatch.setenv(CONFIG_HOME_ENV, str(home))
	reset_default_registry()
	yield home
	reset_default_registry()
