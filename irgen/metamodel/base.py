# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This module contains the classes of an irgen register map model."""

import dataclasses
from enum import Enum, auto
from typing import Iterator, Tuple, Union


class AccessType(Enum):
	"""Canonical software access kind of a field. Member names double as
	UVM access policy strings.
	"""

	RW = auto()
	RO = auto()
	WO = auto()
	RC = auto()
	"""Readable, cleared on read."""
	W1C = auto()
	"""Readable, writing a one clears the bit."""
	W1S = auto()
	"""Readable, writing a one sets the bit."""

	@property
	def readable(self) -> bool:
		return self is not AccessType.WO

	@property
	def writable(self) -> bool:
		return self not in (AccessType.RO, AccessType.RC)

	def __str__(self) -> str:
		return self.name

@dataclasses.dataclass(frozen=True)
class Field:
	"""A named bit range inside a register."""

	name: str
	offset: int
	"""Least significant bit of the field."""
	width: int
	attr: AccessType
	reset: int
	desc: str = ""

	@property
	def msb(self) -> int:
		return self.offset + self.width - 1

	@property
	def mask(self) -> int:
		"""The bits this field occupies, shifted to its position in the register."""
		return ((1 << self.width) - 1) << self.offset

@dataclasses.dataclass(frozen=True)
class Register:
	"""A register, located at `offset` bytes from the base of its block."""

	name: str
	offset: int
	size: int
	"""Register width in bits."""
	fields: Tuple[Field, ...] = ()

	@property
	def reset(self) -> int:
		"""The reset value of the whole register, composed from its fields."""
		value = 0
		for field in self.fields:
			value |= field.reset << field.offset
		return value

	@property
	def mask(self) -> int:
		"""Bits covered by any field."""
		value = 0
		for field in self.fields:
			value |= field.mask
		return value

@dataclasses.dataclass(frozen=True)
class Block:
	"""An address block: a group of registers starting at base address `offset`,
	spanning `range` bytes with a data width of `size` bits.
	"""

	name: str
	offset: int
	range: int
	size: int
	registers: Tuple[Register, ...] = ()

@dataclasses.dataclass(frozen=True)
class Component:
	"""The root of a register map model."""

	vendor: str
	library: str
	name: str
	version: str
	blocks: Tuple[Block, ...] = ()

	@property
	def vlnv(self) -> str:
		return f"{self.vendor}:{self.library}:{self.name}:{self.version}"

	@property
	def register_count(self) -> int:
		return sum(len(blk.registers) for blk in self.blocks)

	@property
	def field_count(self) -> int:
		return sum(len(reg.fields) for blk in self.blocks for reg in blk.registers)

	def walk(self) -> Iterator[Tuple[str, Union[Block, Register, Field]]]:
		"""Yield (dotted path, node) pairs for every block, register and field, depth first."""

		for blk in self.blocks:
			yield blk.name, blk
			for reg in blk.registers:
				reg_path = f"{blk.name}.{reg.name}"
				yield reg_path, reg
				for field in reg.fields:
					yield f"{reg_path}.{field.name}", field
