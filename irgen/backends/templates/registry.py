# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""A registry of mako templates, merged from the templates bundled with irgen and
the templates found in a user templates directory.
"""

import dataclasses
import logging
import os
import pathlib
import threading
from typing import Dict, List, Optional

from mako import exceptions
from mako.lookup import TemplateCollection
from mako.template import Template

from ... import ConfigError, TemplateInitError, TemplateRenderError
from ... import config
from ...metamodel.base import Component

logger = logging.getLogger("templates")

TEMPLATE_EXTENSION = ".mako"

template_dir = pathlib.Path(__file__).parent.resolve()
builtin_dir = template_dir / "builtin"

def collect_template_files(directory: pathlib.Path, files: List[pathlib.Path]):
	"""Recursively collect all template files below `directory`. Raises OSError if
	a directory can not be listed.
	"""

	with os.scandir(directory) as it:
		for entry in it:
			path = pathlib.Path(entry.path)
			if entry.is_dir():
				collect_template_files(path, files)
			elif path.suffix.lower() == TEMPLATE_EXTENSION:
				files.append(path)

def build_context(compo: Component) -> dict:
	"""The render context: the component's own fields at the top level, and the
	component itself as `compo` and `component`.
	"""

	context = {f.name: getattr(compo, f.name) for f in dataclasses.fields(compo)}
	context["compo"] = compo
	context["component"] = compo
	return context

class TemplateRegistry(TemplateCollection):
	"""Holds compiled templates by name. Built-in templates are registered first,
	user templates from `user_dir` afterwards and replace built-ins of the same name.

	Every template is available under its path relative to its templates directory
	and, if not taken yet, under its bare file name. A bare name taken by a built-in
	counts as free for user templates, so ``<user_dir>/c_header.mako`` as well as
	``<user_dir>/any/sub/dir/c_header.mako`` replace the built-in C header template.

	The registry is not modified after construction. Templates resolve
	``<%include>`` and ``<%inherit>`` through the registry itself.
	"""

	def __init__(self, user_dir: Optional[pathlib.Path] = None, builtins: pathlib.Path = builtin_dir):
		super().__init__()
		self._templates: Dict[str, Template] = {}
		self._origins: Dict[str, str] = {}
		self._user_names = set()

		logger.debug("loading built-in templates from %s", builtins)
		for path, rel_name in self._scan(builtins, builtins.parent):
			self._register(rel_name, self._read(path), str(path), user=False)

		if user_dir is not None:
			user_dir = pathlib.Path(user_dir)
			if user_dir.exists():
				logger.info("loading user templates from %s", user_dir)
				for path, rel_name in self._scan(user_dir, user_dir):
					self._register(rel_name, self._read(path), str(path), user=True)
			else:
				logger.debug("user templates directory %s does not exist", user_dir)

	@staticmethod
	def _scan(directory: pathlib.Path, base: pathlib.Path):
		files = []
		try:
			collect_template_files(directory, files)
		except OSError as e:
			raise TemplateInitError(f"can not list templates directory {directory}: {e}") from e

		for path in sorted(files):
			yield path, path.relative_to(base).as_posix()

	@staticmethod
	def _read(path: pathlib.Path) -> str:
		try:
			return path.read_bytes().decode("utf-8")
		except UnicodeDecodeError as e:
			raise TemplateInitError(f"template is not valid UTF-8 ({path}): {e}") from e
		except OSError as e:
			raise TemplateInitError(f"can not read template {path}: {e}") from e

	def _compile(self, name: str, text: str) -> Template:
		try:
			return Template(text=text, uri=name, lookup=self, strict_undefined=True)
		except exceptions.MakoException as e:
			raise TemplateInitError(f"invalid template {name}: {e}") from e

	def _register(self, rel_name: str, text: str, origin: str, user: bool):
		template = self._compile(rel_name, text)
		alias = pathlib.PurePosixPath(rel_name).name

		names = [rel_name]
		if alias != rel_name:
			if alias not in self._templates or (user and alias not in self._user_names):
				names.append(alias)
			else:
				logger.debug("alias %s of %s is already taken by %s", alias, rel_name, self._origins[alias])

		for name in names:
			if name in self._templates:
				if not user:
					continue
				logger.info("template %s from %s replaces %s", name, origin, self._origins[name])
			self._templates[name] = template
			self._origins[name] = origin
			if user:
				self._user_names.add(name)

	@property
	def names(self) -> "list[str]":
		return sorted(self._templates)

	def origin(self, name: str) -> str:
		"""Return the file the template registered as `name` was read from."""
		return self._origins[name]

	def is_builtin(self, name: str) -> bool:
		"""Whether `name` resolves to a template bundled with irgen."""
		name = name.replace("\\", "/")
		return name in self._templates and name not in self._user_names

	def has_template(self, uri) -> bool:
		return uri.replace("\\", "/") in self._templates

	def get_template(self, uri, relativeto=None) -> Template:
		try:
			return self._templates[uri.replace("\\", "/")]
		except KeyError:
			raise exceptions.TopLevelLookupException(f"can not locate template {uri!r}") from None

	def render(self, name: str, compo: Component) -> str:
		"""Render template `name` for `compo`. Errors inside the template are raised as
		TemplateRenderError, with the original exception chained.
		"""

		try:
			template = self.get_template(name)
		except exceptions.TopLevelLookupException as e:
			raise TemplateRenderError(str(e)) from e

		logger.debug("rendering %s from %s", name, template.filename or template.uri)

		try:
			return template.render(**build_context(compo))
		except Exception as e:
			raise TemplateRenderError(f"error rendering {name}: {type(e).__name__}: {e}") from e

_default_lock = threading.Lock()
_default_outcome = None

def default_templates_dir() -> pathlib.Path:
	"""The configured templates directory, falling back to ``<config root>/templates``."""

	app_config = config.load_app_config_or_default()
	if app_config.templates_dir:
		return pathlib.Path(app_config.templates_dir).expanduser()
	return config.templates_dir()

def default_registry() -> TemplateRegistry:
	"""Return the process-wide registry, building it on first use.

	The registry is built at most once. If building fails, the failure is kept and
	every call raises a TemplateInitError with the same message.
	"""

	global _default_outcome

	with _default_lock:
		if _default_outcome is None:
			try:
				_default_outcome = (TemplateRegistry(default_templates_dir()), None)
			except (TemplateInitError, ConfigError) as e:
				logger.error("template initialization failed: %s", e)
				_default_outcome = (None, TemplateInitError(str(e)))

		registry, error = _default_outcome

	if error is not None:
		raise TemplateInitError(str(error)) from error
	return registry

def reset_default_registry():
	"""Forget the process-wide registry, the next default_registry() call builds a new one."""

	global _default_outcome

	with _default_lock:
		_default_outcome = None
