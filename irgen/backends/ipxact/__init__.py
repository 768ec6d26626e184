# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This is the IP-XACT backend of irgen. :func:`~irgen.backends.ipxact.adapter.to_ipxact`
maps a component onto an IEEE 1685-2014 ``component`` element tree,
:func:`~irgen.backends.ipxact.adapter.serialize` turns that tree into an XML document.
"""

from .adapter import IPXACT_NS, serialize, to_ipxact
