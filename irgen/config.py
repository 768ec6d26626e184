# SPDX-License-Identifier: Apache-2.0
#
# This file is part of the irgen project.
#
# Copyright (C) 2026
# irgen contributors

"""User configuration: the irgen config directory, its templates directory and
the ``config.yml`` file holding an :class:`AppConfig`.

The config directory is ``$IRGEN_CONFIG_HOME`` if set, ``~/.config/irgen`` otherwise.
"""

import dataclasses
import logging
import os
import pathlib
from typing import List, Optional

import yaml

from . import ConfigError

logger = logging.getLogger("config")

CONFIG_HOME_ENV = "IRGEN_CONFIG_HOME"

@dataclasses.dataclass
class AppConfig:
	export_formats: List[str] = dataclasses.field(default_factory=lambda: ["ipxact"])
	"""Export kinds used by irgen-export when no --format is given."""
	templates_dir: Optional[str] = None
	"""Overrides the default templates directory."""

def config_root() -> pathlib.Path:
	env = os.environ.get(CONFIG_HOME_ENV)
	if env:
		return pathlib.Path(env).expanduser()

	try:
		home = pathlib.Path.home()
	except (RuntimeError, KeyError) as e:
		raise ConfigError("Failed to resolve home directory for user config.") from e

	return home / ".config" / "irgen"

def templates_dir() -> pathlib.Path:
	return config_root() / "templates"

def config_file_path() -> pathlib.Path:
	return config_root() / "config.yml"

def ensure_dirs():
	root = config_root()
	try:
		root.mkdir(parents=True, exist_ok=True)
		(root / "templates").mkdir(exist_ok=True)
	except OSError as e:
		raise ConfigError(f"can not create config directory {root}: {e}") from e

def load_app_config() -> AppConfig:
	path = config_file_path()
	if not path.exists():
		return AppConfig()

	try:
		with open(path, "r", encoding="utf-8") as f:
			data = yaml.safe_load(f)
	except (OSError, yaml.YAMLError) as e:
		raise ConfigError(f"can not read {path}: {e}") from e

	if data is None:
		return AppConfig()
	if not isinstance(data, dict):
		raise ConfigError(f"{path}: expected a mapping at the top level")

	known = {f.name for f in dataclasses.fields(AppConfig)}
	unknown = set(data) - known
	if unknown:
		logger.warning("ignoring unknown config keys in %s: %s", path, ", ".join(sorted(unknown)))

	return AppConfig(**{key: val for key, val in data.items() if key in known})

def load_app_config_or_default() -> AppConfig:
	try:
		return load_app_config()
	except ConfigError as e:
		logger.warning("Failed to load app config, fallback to defaults: %s", e)
		return AppConfig()

def save_app_config(app_config: AppConfig):
	"""Write `app_config` to a temporary file and move it over the config file. If the
	move fails because the config file exists, remove it and move again.
	"""

	ensure_dirs()
	path = config_file_path()
	tmp_path = path.with_suffix(".yml.tmp")

	try:
		with open(tmp_path, "w", encoding="utf-8") as f:
			yaml.safe_dump(dataclasses.asdict(app_config), f, default_flow_style=False)

		try:
			os.rename(tmp_path, path)
		except OSError:
			if not path.exists():
				raise
			logger.debug("rename onto %s failed, removing it first", path)
			os.remove(path)
			os.rename(tmp_path, path)
	except OSError as e:
		raise ConfigError(f"can not save {path}: {e}") from e
