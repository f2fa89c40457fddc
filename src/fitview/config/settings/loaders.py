"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from dotenv import dotenv_values

from fitview.config.settings.base import Settings
from fitview.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def _to_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"expected a boolean, got {raw!r}")


def _to_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


# Field annotations are strings under ``from __future__ import annotations``.
_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "bool": _to_bool,
    "int": int,
    "float": float,
    "str": str,
    "list[str]": _to_list,
}


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables.

    *environ* defaults to ``os.environ``; any mapping of strings works.
    """

    def __init__(self, environ: Mapping[str, str | None] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        required = set(settings_class.required_fields())
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field.name)
            raw = environ.get(env_key)
            if raw is None:
                if field.name in required:
                    raise MissingRequiredSettingError(env_key)
                continue
            kwargs[field.name] = self._convert(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}", cause=exc) from exc

    @staticmethod
    def _convert(env_key: str, raw: str, type_hint: Any) -> Any:
        name = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "str")
        converter = _CONVERTERS.get(name.replace(" ", ""), str)
        try:
            return converter(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(env_key, raw, str(exc)) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file layered with the process environment.

    Process variables win unless *override* is set. The file is read with
    ``dotenv_values``; ``os.environ`` is left untouched.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        file_values = dotenv_values(self._env_file)
        if self._override:
            environ = {**os.environ, **file_values}
        else:
            environ = {**file_values, **os.environ}
        return EnvSettingsLoader(environ).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
