# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This is the top-level irgen package. The project is divided into three major parts:

* :mod:`irgen.metamodel`, the register map model (Component, Block, Register, Field).
* :mod:`irgen.frontends`, producers of irgen models. Currently provided is a loader
  for register map spreadsheets.
* :mod:`irgen.backends`, consumers of irgen models. Provided are IP-XACT and RegVue
  writers and a template engine for C headers, UVM RAL, SystemVerilog RTL and HTML.

All errors raised by irgen derive from :class:`IrgenError`, so a caller only needs
a single ``except`` clause to report a failed load or export.
"""

class IrgenError(Exception):
	pass

class ConfigError(IrgenError):
	pass

class TemplateInitError(IrgenError):
	pass

class TemplateRenderError(IrgenError):
	pass

class WorkbookError(IrgenError, OSError):
	pass

class MissingSheetError(IrgenError, LookupError):
	"""A required sheet is not part of the workbook."""

	def __init__(self, key: str):
		self.key = key
		super().__init__(f"missing sheet: {key!r}")

class MalformedSheetError(IrgenError, ValueError):
	"""A sheet is present, but its contents can not be used."""

	def __init__(self, sheet: str, message: str):
		self.sheet = sheet
		super().__init__(f"sheet {sheet!r}: {message}")

class CellValueError(MalformedSheetError):
	def __init__(self, sheet: str, column: str, row: int, value, reason: str = None):
		self.column = column
		self.row = row
		self.value = value
		message = f"row {row}, column {column!r}: can not parse {value!r}"
		if reason:
			message += f" ({reason})"
		super().__init__(sheet, message)

class BitRangeError(MalformedSheetError):
	def __init__(self, sheet: str, register: str, fields: "tuple[str, ...]", message: str):
		self.register = register
		self.fields = tuple(fields)
		super().__init__(sheet, f"register {register}: {message}")

class SchemaValidationError(MalformedSheetError):
	pass

class ConversionError(IrgenError, ValueError):
	pass

class SerializationError(IrgenError):
	pass

class OutputError(IrgenError, OSError):
	pass
