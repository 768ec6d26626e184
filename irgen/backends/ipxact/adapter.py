# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Map an irgen component onto an IP-XACT element tree."""

import logging
import xml.etree.ElementTree as ET

from ... import ConversionError, SerializationError
from ...metamodel.base import AccessType, Block, Component, Field, Register
from ...metamodel.identifiers import identifier_problem

logger = logging.getLogger("ipxact")

IPXACT_NS = "http://www.accellera.org/XMLSchema/IPXACT/1685-2014"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{IPXACT_NS} {IPXACT_NS}/index.xsd"

ET.register_namespace("ipxact", IPXACT_NS)
ET.register_namespace("xsi", XSI_NS)

ACCESS_MAP = {
	AccessType.RW: "read-write",
	AccessType.RO: "read-only",
	AccessType.WO: "write-only",
	AccessType.RC: "read-only",
	AccessType.W1C: "read-write",
	AccessType.W1S: "read-write",
}

WRITE_MAP = {
	AccessType.W1C: "oneToClear",
	AccessType.W1S: "oneToSet",
}

READ_ACTION_MAP = {
	AccessType.RC: "clear",
}

def tag(name: str) -> str:
	return f"{{{IPXACT_NS}}}{name}"

def sv_hex(value: int) -> str:
	"""Format `value` as an IP-XACT 2014 hexadecimal expression, e.g. 'h1000."""
	return f"'h{value:X}"

def sub(parent: ET.Element, name: str, text=None) -> ET.Element:
	elem = ET.SubElement(parent, tag(name))
	if text is not None:
		elem.text = str(text)
	return elem

def checked_name(path: str, name: str) -> str:
	problem = identifier_problem(name)
	if problem:
		raise ConversionError(f"IP-XACT: {path}: name {name!r}: {problem}")
	return name

def field_element(parent: ET.Element, field: Field, path: str):
	elem = sub(parent, "field")
	sub(elem, "name", checked_name(path, field.name))
	if field.desc:
		sub(elem, "description", field.desc)
	sub(elem, "bitOffset", field.offset)
	resets = sub(elem, "resets")
	reset = sub(resets, "reset")
	sub(reset, "value", sv_hex(field.reset))
	sub(elem, "bitWidth", field.width)
	sub(elem, "access", ACCESS_MAP[field.attr])
	if field.attr in WRITE_MAP:
		sub(elem, "modifiedWriteValue", WRITE_MAP[field.attr])
	if field.attr in READ_ACTION_MAP:
		sub(elem, "readAction", READ_ACTION_MAP[field.attr])

def register_element(parent: ET.Element, reg: Register, path: str):
	elem = sub(parent, "register")
	sub(elem, "name", checked_name(path, reg.name))
	sub(elem, "addressOffset", sv_hex(reg.offset))
	sub(elem, "size", reg.size)
	for field in reg.fields:
		field_element(elem, field, f"{path}.{field.name}")

def block_element(parent: ET.Element, blk: Block):
	elem = sub(parent, "addressBlock")
	sub(elem, "name", checked_name(blk.name, blk.name))
	sub(elem, "baseAddress", sv_hex(blk.offset))
	sub(elem, "range", sv_hex(blk.range))
	sub(elem, "width", blk.size)
	sub(elem, "usage", "register")
	for reg in blk.registers:
		register_element(elem, reg, f"{blk.name}.{reg.name}")

def to_ipxact(compo: Component) -> ET.Element:
	"""Build an ``ipxact:component`` element with a single memory map holding
	one address block per irgen block.
	"""

	for label, value in (("vendor", compo.vendor), ("library", compo.library), ("version", compo.version)):
		if not value or any(c.isspace() for c in value):
			raise ConversionError(f"IP-XACT: component {label} {value!r} is not a valid token")

	logger.debug("building IP-XACT tree for %s", compo.vlnv)

	root = ET.Element(tag("component"))
	root.set(f"{{{XSI_NS}}}schemaLocation", SCHEMA_LOCATION)
	sub(root, "vendor", compo.vendor)
	sub(root, "library", compo.library)
	sub(root, "name", checked_name("component", compo.name))
	sub(root, "version", compo.version)

	memory_maps = sub(root, "memoryMaps")
	memory_map = sub(memory_maps, "memoryMap")
	sub(memory_map, "name", compo.name)
	for blk in compo.blocks:
		block_element(memory_map, blk)

	return root

def serialize(root: ET.Element) -> bytes:
	"""Serialize an element tree into an indented UTF-8 XML document."""

	try:
		ET.indent(root)
		return ET.tostring(root, encoding="UTF-8", xml_declaration=True)
	except (TypeError, ValueError) as e:
		raise SerializationError(f"can not serialize IP-XACT document: {e}") from e
