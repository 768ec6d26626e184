# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Load a register map workbook into an irgen model. Also the main entrypoint
for the irgen-load program, which loads a workbook and prints a summary.
"""

import argparse
import dataclasses
import logging
import pathlib
import sys
from typing import Optional

from ... import IrgenError
from ...metamodel.base import Component
from .schema_builder import VERSION_SHEET, build_component
from .workbook import read_workbook

logger = logging.getLogger("loader")

@dataclasses.dataclass(frozen=True)
class LoadResult:
	"""A loaded component together with information about the file it came from."""

	component: Component
	directory: pathlib.Path
	file: pathlib.Path
	file_size: Optional[int]
	sheet_count: Optional[int]

def load_excel(path) -> LoadResult:
	"""Read the workbook at `path` and build a component from it."""

	path = pathlib.Path(path)
	directory = path.absolute().parent

	try:
		file_size = path.stat().st_size
	except OSError:
		file_size = None

	frames = read_workbook(path, text_sheets=(VERSION_SHEET,))
	component = build_component(frames)

	logger.info("loaded component %s with %d blocks", component.vlnv, len(component.blocks))

	return LoadResult(component, directory, path, file_size, len(frames))

def main():
	"""irgen-load main entrypoint function."""

	parser = argparse.ArgumentParser(description="Load a register map workbook and print a summary.")
	parser.add_argument("input", help="The .xlsx/.xlsm workbook to load.")
	parser.add_argument("--log", default="info", choices=["critical", "error", "warning", "info", "debug"])
	args = parser.parse_args()

	logging.basicConfig(level=getattr(logging, args.log.upper()))

	try:
		result = load_excel(args.input)
	except IrgenError as e:
		logger.critical("Failed to load excel: %s", e)
		sys.exit(1)

	compo = result.component
	print(f"Loaded: {result.file} (sheets: {result.sheet_count})")
	print(f"Component: {compo.vlnv}")
	print(f"Blocks: {len(compo.blocks)}, registers: {compo.register_count}, fields: {compo.field_count}")

if __name__ == "__main__":
	main()
