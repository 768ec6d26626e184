# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""Checks for names that end up as symbols in generated C and SystemVerilog code."""

import re

IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

C_KEYWORDS = frozenset("""
	auto break case char const continue default do double else enum extern float for goto if
	inline int long register restrict return short signed sizeof static struct switch typedef
	union unsigned void volatile while _Bool _Complex _Imaginary _Alignas _Alignof _Atomic
	_Generic _Noreturn _Static_assert _Thread_local
""".split())

SV_KEYWORDS = frozenset("""
	alias always always_comb always_ff always_latch and assert assign assume automatic before
	begin bind bins binsof bit break buf bufif0 bufif1 byte case casex casez cell chandle
	checker class clocking cmos config const constraint context continue cover covergroup
	coverpoint cross deassign default defparam design disable dist do edge else end endcase
	endchecker endclass endclocking endconfig endfunction endgenerate endgroup endinterface
	endmodule endpackage endprimitive endprogram endproperty endspecify endsequence endtable
	endtask enum event eventually expect export extends extern final first_match for force
	foreach forever fork forkjoin function generate genvar global highz0 highz1 if iff ifnone
	ignore_bins illegal_bins implements implies import incdir include initial inout input
	inside instance int integer interconnect interface intersect join join_any join_none
	large let liblist library local localparam logic longint macromodule matches medium
	modport module nand negedge nettype new nexttime nmos nor noshowcancelled not notif0
	notif1 null or output package packed parameter pmos posedge primitive priority program
	property protected pull0 pull1 pulldown pullup pulsestyle_ondetect pulsestyle_onevent
	pure rand randc randcase randsequence rcmos real realtime ref reg reject_on release
	repeat restrict return rnmos rpmos rtran rtranif0 rtranif1 s_always s_eventually
	s_nexttime s_until s_until_with scalared sequence shortint shortreal showcancelled signed
	small soft solve specify specparam static string strong strong0 strong1 struct super
	supply0 supply1 sync_accept_on sync_reject_on table tagged task this throughout time
	timeprecision timeunit tran tranif0 tranif1 tri tri0 tri1 triand trior trireg type
	typedef union unique unique0 unsigned until until_with untyped use uwire var vectored
	virtual void wait wait_order wand weak weak0 weak1 while wildcard wire with within wor
	xnor xor
""".split())

def identifier_problem(name) -> "str | None":
	"""Return a description of why `name` can not be used as a C and SystemVerilog
	identifier, or None if it can.
	"""

	if not isinstance(name, str) or not name:
		return "name is empty"
	if not IDENTIFIER_RE.match(name):
		return "not a valid identifier"
	if name in C_KEYWORDS:
		return "reserved word in C"
	if name in SV_KEYWORDS:
		return "reserved word in SystemVerilog"
	return None

def check_identifier(name) -> bool:
	return identifier_problem(name) is None
