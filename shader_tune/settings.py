import logging
import os

import yaml

from shader_tune.config import (
    DEBOUNCE_INTERVAL, DEFAULT_API_HOST, DEFAULT_API_PORT, DEFAULT_LANGUAGE,
    DEFAULT_LOG_LEVEL, HEIGHT, SHADER_EXTENSIONS, WIDTH,
)
from shader_tune.keywords import DATABASES

log = logging.getLogger(__name__)


class SettingsError(Exception):
    pass


class EditorSettings:
    """
    User settings for the editor. Values come from the defaults below, then
    the YAML settings file, then command line arguments, later ones winning.
    """
    FIELDS = {
        "auto_compile": True,
        "debounce_interval": DEBOUNCE_INTERVAL,
        "language": DEFAULT_LANGUAGE,
        "log_level": logging.getLevelName(DEFAULT_LOG_LEVEL),
        "width": WIDTH,
        "height": HEIGHT,
        "compile_timeout": None,
        "extensions": list(SHADER_EXTENSIONS),
        "api_host": DEFAULT_API_HOST,
        "api_port": DEFAULT_API_PORT,
    }

    def __init__(self, **kwargs):
        for name, default in self.FIELDS.items():
            value = kwargs.pop(name, default)
            setattr(self, name, list(value) if isinstance(value, (list, tuple)) else value)
        for name in kwargs:
            log.warning(f"Ignoring unknown setting '{name}'")
        self.validate()

    def __repr__(self):
        return f"EditorSettings({self.as_dict()})"

    def as_dict(self):
        return {name: getattr(self, name) for name in self.FIELDS}

    def validate(self):
        if not isinstance(self.debounce_interval, (int, float)) or self.debounce_interval < 0:
            raise SettingsError(f"debounce_interval must be a non-negative number, got {self.debounce_interval!r}")
        if self.compile_timeout is not None and (not isinstance(self.compile_timeout, (int, float)) or self.compile_timeout <= 0):
            raise SettingsError(f"compile_timeout must be a positive number, got {self.compile_timeout!r}")
        if str(self.log_level).upper() not in logging.getLevelNamesMapping():
            raise SettingsError(f"Unknown log level '{self.log_level}'")
        self.log_level = str(self.log_level).upper()
        if str(self.language).lower() not in DATABASES:
            raise SettingsError(f"Unknown shading language '{self.language}', expected one of {sorted(DATABASES)}")
        self.language = str(self.language).lower()
        for name in ("width", "height", "api_port"):
            if not isinstance(getattr(self, name), int) or getattr(self, name) <= 0:
                raise SettingsError(f"{name} must be a positive integer, got {getattr(self, name)!r}")

    def updated(self, **overrides):
        """Returns a copy with every override that is not None applied."""
        values = self.as_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return EditorSettings(**values)

    @classmethod
    def load(cls, path):
        """
        Reads settings from a YAML mapping. A missing file gives the defaults,
        a malformed one raises SettingsError.
        """
        if not os.path.exists(path):
            log.info(f"Settings file {path} does not exist, using defaults")
            return cls()

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError(f"Could not read settings file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")

        log.info(f"Loaded settings from {path}")
        return cls(**data)

    def save(self, path):
        with open(path, 'w') as f:
            yaml.dump(self.as_dict(), f, default_flow_style=False, sort_keys=False)
        log.info(f"Saved settings to {path}")
