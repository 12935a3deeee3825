"""Reporter configuration management.

Handles:
- A fixed set of rendering options, each with a default and an env var
- Caller-supplied options, overridden by the first config file found:
  jesthtmlreporter.config.json > package.json > pyproject.toml
- Lookup precedence: env var > configured value > default
"""
from __future__ import annotations

import json
import logging
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from jesthtmlreporter.errors import INVALID_CONFIG_VALUE, make_error

logger = logging.getLogger(__name__)

ENV_PREFIX = "JEST_HTML_REPORTER"
CONFIG_FILE_NAME = "jesthtmlreporter.config.json"
MANIFEST_FILE_NAME = "package.json"
PYPROJECT_FILE_NAME = "pyproject.toml"
MANIFEST_KEY = "jest-html-reporter"

DEFAULT_OUTPUT_FILE = "test-report.html"
DEFAULT_DATE_FORMAT = "yyyy-mm-dd HH:MM:ss"

# Older config files used these names.
LEGACY_KEYS = {
    "boilerplate": "boilerplatePath",
    "logo": "logoPath",
}

# Older releases read these variables; the canonical name wins when both are set.
LEGACY_ENV_VARS = {
    "boilerplatePath": ("JEST_HTML_REPORTER_BOILERPLATE",),
    "logoPath": ("JEST_HTML_REPORTER_LOGO",),
    "statusIgnoreFilter": ("JEST_HTML_REPORTER_STATUS_FILTER",),
}

TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off", ""}


def env_var_name(option: str) -> str:
    """``outputPath`` -> ``JEST_HTML_REPORTER_OUTPUT_PATH``."""
    return f"{ENV_PREFIX}_{re.sub(r'(?<!^)(?=[A-Z])', '_', option).upper()}"


def snake_case(option: str) -> str:
    """``outputPath`` -> ``output_path``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", option).lower()


# option name -> default (outputPath is filled in per working directory)
OPTION_DEFAULTS: dict[str, Any] = {
    "append": False,
    "boilerplatePath": None,
    "customScriptPath": None,
    "dateFormat": DEFAULT_DATE_FORMAT,
    "executionTimeWarningThreshold": 5,
    "logoPath": None,
    "includeFailureMsg": False,
    "includeConsoleLog": False,
    "outputPath": None,
    "pageTitle": "Test Report",
    "theme": "defaultTheme",
    "sort": None,
    "statusIgnoreFilter": None,
    "styleOverridePath": None,
    "useCssFile": False,
}

OPTION_NAMES = tuple(OPTION_DEFAULTS)

_KEY_ALIASES: dict[str, str] = {
    **{name: name for name in OPTION_NAMES},
    **{snake_case(name): name for name in OPTION_NAMES},
    **LEGACY_KEYS,
}


def canonical_key(key: str) -> Optional[str]:
    """Return the option name for a camelCase, snake_case or legacy key."""
    return _KEY_ALIASES.get(key)


@dataclass
class ConfigOption:
    """One recognized option.

    ``is_set`` records whether a source supplied a value, so a configured
    ``False`` or ``0`` is kept instead of falling back to the default.
    """

    default: Any
    environment_variable: str
    value: Any = None
    is_set: bool = False
    source: str = "default"
    legacy_environment_variables: tuple[str, ...] = ()

    def env_value(self, environ: Mapping[str, str]) -> Optional[str]:
        """First non-empty value among the canonical and legacy env vars."""
        for name in (self.environment_variable, *self.legacy_environment_variables):
            value = environ.get(name)
            if value:
                return value
        return None

    def assign(self, value: Any, source: str) -> None:
        if value is None:
            return
        self.value = value
        self.is_set = True
        self.source = source


# A config source gets the working directory and returns a partial mapping,
# or None when it has nothing to offer.
ConfigSource = Callable[[Path], Optional[Mapping[str, Any]]]


def read_config_file(cwd: Path) -> Optional[Mapping[str, Any]]:
    """Options from ``jesthtmlreporter.config.json``."""
    text = (cwd / CONFIG_FILE_NAME).read_text(encoding="utf-8")
    if not text:
        return None
    return json.loads(text)


def read_package_json(cwd: Path) -> Optional[Mapping[str, Any]]:
    """Options from the ``jest-html-reporter`` key of ``package.json``."""
    manifest = json.loads((cwd / MANIFEST_FILE_NAME).read_text(encoding="utf-8"))
    if not isinstance(manifest, dict):
        return None
    return manifest.get(MANIFEST_KEY)


def read_pyproject(cwd: Path) -> Optional[Mapping[str, Any]]:
    """Options from ``[tool.jest-html-reporter]`` in ``pyproject.toml``."""
    with (cwd / PYPROJECT_FILE_NAME).open("rb") as f:
        manifest = tomllib.load(f)
    tool = manifest.get("tool")
    if not isinstance(tool, dict):
        return None
    return tool.get(MANIFEST_KEY)


CONFIG_SOURCES: tuple[tuple[str, ConfigSource], ...] = (
    ("config-file", read_config_file),
    ("package.json", read_package_json),
    ("pyproject.toml", read_pyproject),
)


def to_bool(value: Any) -> bool:
    """Coerce a configured or env-supplied value to a boolean."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise make_error(INVALID_CONFIG_VALUE, f"expected a boolean, got {value!r}")
    return bool(value)


def to_float(value: Any) -> float:
    """Coerce a configured or env-supplied value to a number."""
    if isinstance(value, bool):
        raise make_error(INVALID_CONFIG_VALUE, f"expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise make_error(INVALID_CONFIG_VALUE, f"expected a number, got {value!r}") from e


class ConfigResolver:
    """Effective reporter configuration for one render.

    Args:
        options: Caller-supplied options (camelCase or snake_case keys).
        cwd: Directory searched for config files; also the base of the
            default output path. Defaults to the process working directory.
        environ: Environment mapping consulted on every lookup. Defaults to
            ``os.environ``.
        sources: Ordered config-file sources; the first one that yields a
            mapping is applied.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cwd: str | Path | None = None,
        environ: Optional[Mapping[str, str]] = None,
        sources: tuple[tuple[str, ConfigSource], ...] = CONFIG_SOURCES,
    ) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.loaded_from: Optional[str] = None

        self.options: dict[str, ConfigOption] = {}
        for name, default in OPTION_DEFAULTS.items():
            if name == "outputPath":
                default = str(self.cwd / DEFAULT_OUTPUT_FILE)
            self.options[name] = ConfigOption(
                default=default,
                environment_variable=env_var_name(name),
                legacy_environment_variables=LEGACY_ENV_VARS.get(name, ()),
            )

        self._apply(options or {}, "options")

        for source_name, source in sources:
            try:
                values = source(self.cwd)
            except (OSError, ValueError) as e:
                logger.debug("Skipping %s config source: %s", source_name, e)
                continue
            if not isinstance(values, Mapping):
                logger.debug("Skipping %s config source: no options object", source_name)
                continue
            self._apply(values, source_name)
            self.loaded_from = source_name
            break

    def _apply(self, values: Mapping[str, Any], source: str) -> None:
        for key, value in values.items():
            name = canonical_key(key)
            if name is not None:
                self.options[name].assign(value, source)

    def get_config_value(self, key: str) -> Any:
        """Return the effective value of an option.

        An env var that is set and non-empty wins and is returned as a raw
        string. Otherwise the configured value is used when one was supplied,
        else the default. Unknown keys return None.
        """
        name = canonical_key(key)
        if name is None:
            return None
        option = self.options[name]
        env_value = option.env_value(self.environ)
        if env_value:
            return env_value
        if option.is_set:
            return option.value
        return option.default

    def get_bool(self, key: str) -> bool:
        return to_bool(self.get_config_value(key))

    def get_float(self, key: str) -> float:
        return to_float(self.get_config_value(key))

    def get_str(self, key: str) -> Optional[str]:
        value = self.get_config_value(key)
        if value is None or value == "":
            return None
        return str(value)

    def source_of(self, key: str) -> str:
        """Which source decides the effective value of an option."""
        name = canonical_key(key)
        if name is None:
            raise KeyError(key)
        option = self.options[name]
        if option.env_value(self.environ):
            return "env"
        return option.source if option.is_set else "default"

    def describe(self) -> dict[str, dict[str, Any]]:
        """Effective value, source and env var for every option."""
        return {
            name: {
                "value": self.get_config_value(name),
                "source": self.source_of(name),
                "env": option.environment_variable,
            }
            for name, option in self.options.items()
        }
