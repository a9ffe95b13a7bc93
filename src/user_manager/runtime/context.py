import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from user_manager.runtime.config.config_data import ConfigData
from user_manager.runtime.config.config_template import load_env_file, load_templated_yaml


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load the configuration file named by ``APP_CONFIG_FILE`` (default ``config.yaml``).

    The ``.env`` file in the working directory is loaded first, so it can also
    name the configuration file. Falls back to the built-in defaults when the
    file does not exist.
    """
    load_env_file(Path(".env"))
    config_path = Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))
    if not config_path.is_file():
        logger.warning("Configuration file {} not found; using defaults", config_path)
        return ConfigData()
    return load_templated_yaml(config_path)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Returns the token needed to restore the previous context.
    """
    return _app_context.set(context)


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Dump only the fields that were explicitly set, at any depth.

    A nested model counts as set when one of its own fields was set, even if
    the parent received it from a default factory and then had it mutated.
    """
    explicit: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """Return ``base`` with the explicitly set fields of ``override`` applied."""
    merged = _deep_merge(base.model_dump(), _explicit_fields(override))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the configuration for the current context.

    Only the fields explicitly set on ``config_override`` replace the current
    values. Overrides nest and are isolated per thread and per asyncio task.

    Example:
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    token = set_context(replace(current, config=merge_config(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with the provided one."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
