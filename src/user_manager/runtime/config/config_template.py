"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from user_manager.runtime.config.config_data import ConfigData


# ${NAME}, ${NAME:-default} or ${NAME:?message}
PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[-?])(?P<arg>[^}]*))?\}")


def _resolve(match: re.Match[str]) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == "-":
        return arg
    if op == "?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    return PLACEHOLDER.sub(_resolve, text)


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment.

    Returns the names of the variables that were overridden.
    """
    prefix = f"{env_mode.upper()}_"
    overridden = []
    for var_name, var_value in list(os.environ.items()):
        if not var_name.startswith(prefix) or var_name == prefix:
            continue
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        overridden.append(new_var_name)
        logger.debug("Set environment variable {} from {}", new_var_name, var_name)
    return overridden


def load_env_file(env_file: Path | None = Path(".env")) -> bool:
    """Load ``env_file`` into the process environment if it exists.

    Variables already present in the environment are not overwritten.
    """
    if env_file is None or not env_file.is_file():
        return False
    load_dotenv(env_file, override=False)
    logger.debug("Loaded environment file {}", env_file)
    return True


def _strip_comment_lines(text: str) -> str:
    # Placeholders in full-line comments are documentation, not templates
    return "\n".join(
        line for line in text.splitlines() if not line.lstrip().startswith("#")
    )


def load_templated_yaml(file_path: Path, env_file: Path | None = Path(".env")) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Full-line ``#`` comments are dropped before substitution.

    Args:
        file_path: Path to the YAML file
        env_file: Optional dotenv file loaded before substitution. Variables
            already present in the environment are not overwritten.

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            configuration is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = _strip_comment_lines(f.read())

    load_env_file(env_file)

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    overridden = apply_environment_overrides(env_mode)
    if overridden:
        logger.info("Applied environment-specific overrides: {}", overridden)

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config_data = loaded.get('config') or {}
        config = ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    return config
