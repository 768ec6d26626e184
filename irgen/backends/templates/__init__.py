# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""This module contains the mako templates bundled with irgen, stored in the
``builtin`` subdirectory of :data:`template_dir`, and the
:class:`~irgen.backends.templates.registry.TemplateRegistry` merging them with
user templates.

Templates are rendered with the component's own fields (``vendor``, ``library``,
``name``, ``version``, ``blocks``) at the top level of the context and the
component itself as ``compo`` and ``component``.
"""

from .registry import (TEMPLATE_EXTENSION, TemplateRegistry, build_context,
                       builtin_dir, default_registry, reset_default_registry,
                       template_dir)
