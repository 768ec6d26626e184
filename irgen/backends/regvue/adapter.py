# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Map an irgen component onto a RegVue document."""

import json
import logging

from ... import ConversionError, SerializationError
from ...metamodel.base import AccessType, Block, Component, Register
from ...metamodel.identifiers import identifier_problem

logger = logging.getLogger("regvue")

SCHEMA = {"name": "register-description-format", "version": "v1"}

ACCESS_MAP = {
	AccessType.RW: "rw",
	AccessType.RO: "ro",
	AccessType.WO: "wo",
	AccessType.RC: "rc",
	AccessType.W1C: "w1c",
	AccessType.W1S: "w1s",
}

def checked_name(path: str, name: str) -> str:
	problem = identifier_problem(name)
	if problem:
		raise ConversionError(f"RegVue: {path}: name {name!r}: {problem}")
	return name

def register_element(blk: Block, reg: Register) -> dict:
	path = f"{blk.name}.{checked_name(f'{blk.name}.{reg.name}', reg.name)}"
	return {
		"type": "reg",
		"id": path,
		"name": reg.name,
		"offset": hex(reg.offset),
		"size": reg.size,
		"fields": [
			{
				"type": "field",
				"name": checked_name(f"{path}.{field.name}", field.name),
				"lsb": field.offset,
				"nbits": field.width,
				"access": ACCESS_MAP[field.attr],
				"reset": hex(field.reset),
				"doc": field.desc,
			}
			for field in reg.fields
		],
	}

def to_regvue(compo: Component) -> dict:
	"""Flatten `compo` into a RegVue document. Blocks are top-level elements, registers
	are children of their block, fields are listed in ascending bit order inside their
	register element.
	"""

	logger.debug("building RegVue document for %s", compo.vlnv)

	elements = {}
	for blk in compo.blocks:
		name = checked_name(blk.name, blk.name)
		elements[name] = {
			"type": "blk",
			"id": name,
			"name": name,
			"offset": hex(blk.offset),
			"range": hex(blk.range),
			"size": blk.size,
			"children": [f"{name}.{reg.name}" for reg in blk.registers],
		}
		for reg in blk.registers:
			elem = register_element(blk, reg)
			elements[elem["id"]] = elem

	return {
		"schema": dict(SCHEMA),
		"root": {
			"name": checked_name("component", compo.name),
			"display_name": compo.name,
			"desc": compo.vlnv,
			"vendor": compo.vendor,
			"library": compo.library,
			"version": compo.version,
			"children": [blk.name for blk in compo.blocks],
			"expanded": [blk.name for blk in compo.blocks],
		},
		"elements": elements,
	}

def serialize(doc: dict) -> bytes:
	try:
		return json.dumps(doc, indent=2).encode("utf-8")
	except (TypeError, ValueError) as e:
		raise SerializationError(f"can not serialize RegVue document: {e}") from e
