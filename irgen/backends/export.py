# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Export an irgen model to files. Also the main entrypoint for the irgen-export
program.

Every export kind is either structural (an adapter building a document tree, and
a serializer turning the tree into bytes) or templated (a template rendered by a
:class:`~irgen.backends.templates.TemplateRegistry`). :func:`export` runs one kind
and writes ``<output stem>.<extension>``, overwriting existing files. UVM RAL and
SystemVerilog RTL both produce ``.sv`` files, exporting both to the same stem
leaves only the second one.
"""

import argparse
import dataclasses
import logging
import pathlib
import sys
from enum import Enum
from typing import Any, Callable, Optional, Union

from .. import IrgenError, OutputError
from .. import config
from ..metamodel.base import Component
from . import ipxact, regvue, symbols
from .templates import TemplateRegistry, default_registry

logger = logging.getLogger("export")

@dataclasses.dataclass(frozen=True)
class Structural:
	adapter: Callable[[Component], Any]
	serializer: Callable[[Any], bytes]
	extension: str

@dataclasses.dataclass(frozen=True)
class Templated:
	template: str
	extension: str
	check: Optional[Callable[[Component], None]] = None
	"""Validates the component against the symbols the bundled template declares."""

class ExportKind(Enum):
	IPXACT = "ipxact"
	REGVUE = "regvue"
	C_HEADER = "c_header"
	UVM_RAL = "uvm_ral"
	SV_RTL = "sv_rtl"
	HTML = "html"

EXPORTERS = {
	ExportKind.IPXACT: Structural(ipxact.to_ipxact, ipxact.serialize, ".xml"),
	ExportKind.REGVUE: Structural(regvue.to_regvue, regvue.serialize, ".json"),
	ExportKind.C_HEADER: Templated("c_header.mako", ".h", symbols.check_c_header),
	ExportKind.UVM_RAL: Templated("uvm_ral.mako", ".sv", symbols.check_uvm_ral),
	ExportKind.SV_RTL: Templated("sv_rtl.mako", ".sv", symbols.check_sv_rtl),
	ExportKind.HTML: Templated("html.mako", ".html"),
}

def output_path(kind: ExportKind, output: pathlib.Path) -> pathlib.Path:
	return pathlib.Path(output).with_suffix(EXPORTERS[kind].extension)

def export(kind: ExportKind, output, compo: Component, registry: Optional[TemplateRegistry] = None) -> pathlib.Path:
	"""Generate `kind` for `compo` and write it next to the path stem `output`.
	Templated kinds use `registry`, or the process-wide default registry if None.
	Raises ConversionError if a bundled template would declare one symbol for two
	elements of `compo`, and OutputError if the file can not be written.
	Returns the path of the written file.
	"""

	exporter: Union[Structural, Templated] = EXPORTERS[kind]
	out_file = output_path(kind, output)

	if isinstance(exporter, Structural):
		content = exporter.serializer(exporter.adapter(compo))
	else:
		if registry is None:
			registry = default_registry()
		if exporter.check is not None and registry.is_builtin(exporter.template):
			exporter.check(compo)
		content = registry.render(exporter.template, compo).encode("utf-8")

	logger.info("writing %s", out_file)

	try:
		with open(out_file, "wb") as f:
			f.write(content)
	except OSError as e:
		raise OutputError(f"can not write {out_file}: {e}") from e

	return out_file

def export_ipxact_xml(output, compo: Component) -> pathlib.Path:
	return export(ExportKind.IPXACT, output, compo)

def export_regvue_json(output, compo: Component) -> pathlib.Path:
	return export(ExportKind.REGVUE, output, compo)

def export_c_header(output, compo: Component, registry: Optional[TemplateRegistry] = None) -> pathlib.Path:
	return export(ExportKind.C_HEADER, output, compo, registry)

def export_uvm_ral(output, compo: Component, registry: Optional[TemplateRegistry] = None) -> pathlib.Path:
	return export(ExportKind.UVM_RAL, output, compo, registry)

def export_sv_rtl(output, compo: Component, registry: Optional[TemplateRegistry] = None) -> pathlib.Path:
	return export(ExportKind.SV_RTL, output, compo, registry)

def export_html(output, compo: Component, registry: Optional[TemplateRegistry] = None) -> pathlib.Path:
	return export(ExportKind.HTML, output, compo, registry)

def main():
	"""irgen-export main entrypoint function."""

	from ..frontends.excel.loader import load_excel

	parser = argparse.ArgumentParser(description="Generate register map artifacts from a workbook.")
	parser.add_argument("input", help="The .xlsx/.xlsm workbook to load.")
	parser.add_argument("-f", "--format", action="append", choices=[x.value for x in ExportKind],
		help="Export kind, may be given multiple times. Defaults to the configured export formats.")
	parser.add_argument("-o", "--output", help="Output path stem, defaults to the input path without suffix.")
	parser.add_argument("--templates", help="User templates directory, defaults to the configured one.")
	parser.add_argument("--log", default="info", choices=["critical", "error", "warning", "info", "debug"])
	args = parser.parse_args()

	logging.basicConfig(level=getattr(logging, args.log.upper()))

	input_path = pathlib.Path(args.input)
	output = pathlib.Path(args.output) if args.output else input_path.with_suffix("")

	try:
		kinds = [ExportKind(x) for x in (args.format or config.load_app_config_or_default().export_formats)]
	except ValueError as e:
		logger.critical("invalid export format in config: %s", e)
		sys.exit(1)

	if ExportKind.UVM_RAL in kinds and ExportKind.SV_RTL in kinds and not args.output:
		logger.warning("uvm_ral and sv_rtl both write %s, only sv_rtl will be kept", output.with_suffix(".sv"))

	try:
		registry = TemplateRegistry(pathlib.Path(args.templates)) if args.templates else None
		result = load_excel(input_path)
		for kind in kinds:
			export(kind, output, result.component, registry)
	except IrgenError as e:
		logger.critical("Export failed: %s", e)
		sys.exit(1)

if __name__ == "__main__":
	main()
