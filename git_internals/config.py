from dataclasses import dataclass
from os import environ
from pathlib import Path


class ConfigError(Exception):
    pass


def str_to_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    if value.lower() in {"yes", "on", "true", "1"}:
        return True
    if value.lower() in {"no", "off", "false", "0"}:
        return False
    return None


def environ_optional_bool(name: str) -> bool | None:
    value = environ.get(name)
    value_bool = str_to_bool(value)
    if value is not None and value_bool is None:
        raise ConfigError(f'Unexpected value for ${{{name}}}: "{value}"')
    return value_bool


def environ_optional_path(name: str) -> Path | None:
    value = environ.get(name)
    if not value:
        return None
    value_path = Path(value)
    if not value_path.is_dir():
        raise ConfigError(f'No directory found at ${{{name}}}: "{value}"')
    return value_path


@dataclass(frozen=True)
class Settings:
    """Settings taken from the environment, overridable on the command line."""

    git_dir: Path | None = None
    debug: bool = False
    color: bool | None = None


def settings_from_environ() -> Settings:
    return Settings(
        git_dir=environ_optional_path("GIT_DIR"),
        debug=environ_optional_bool("GIT_INTERNALS_DEBUG") or False,
        color=environ_optional_bool("GIT_INTERNALS_COLOR"),
    )
