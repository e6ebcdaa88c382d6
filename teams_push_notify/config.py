"""
Step input loading and merge utilities.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .utils import parse_bool, split_multiline


class ConfigError(Exception):
    """Raised when step inputs cannot be loaded or are invalid."""


# Input name -> ActionInputs field name
INPUT_FIELDS = {
    "token": "token",
    "webhook-url": "webhook_url",
    "template": "template",
    "message1": "message1",
    "message2": "message2",
    "action-titles": "action_titles",
    "action-urls": "action_urls",
    "visible-changed-files": "visible_changed_files",
    "job-status": "job_status",
}

_LIST_FIELDS = {"action_titles", "action_urls"}
_BOOL_FIELDS = {"visible_changed_files"}
_SECRET_FIELDS = {"token", "webhook_url"}


@dataclass
class ActionInputs:
    token: str = ""
    webhook_url: str = ""
    template: Optional[str] = None
    message1: str = ""
    message2: str = ""
    action_titles: List[str] = field(default_factory=list)
    action_urls: List[str] = field(default_factory=list)
    visible_changed_files: bool = False
    job_status: str = ""
    config_path: Optional[Path] = None

    def redacted(self) -> Dict[str, Any]:
        """
        Input mapping safe to write to the job log.
        """
        data = asdict(self)
        data.pop("config_path", None)
        for key in _SECRET_FIELDS:
            if data.get(key):
                data[key] = "***"
        return data


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read a step input the way the Actions runner exposes it (INPUT_<NAME>).

    Composite actions cannot export hyphenated variables from YAML, so the
    underscore spelling is accepted as well.
    """
    environ = os.environ if env is None else env
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    for candidate in (key, key.replace("-", "_")):
        value = environ.get(candidate)
        if value is not None:
            return value.strip()
    return ""


def _coerce(field_name: str, value: Any) -> Any:
    if field_name in _BOOL_FIELDS:
        return parse_bool(value)
    if field_name in _LIST_FIELDS:
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value]
        return split_multiline(str(value))
    if field_name == "template":
        text = str(value).strip()
        return text or None
    return str(value).strip()


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {config_path}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError("Configuration file must contain a mapping.")
    return loaded


def load_inputs(
    overrides: Optional[Mapping[str, Any]] = None,
    config_file: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ActionInputs:
    """
    Load step inputs from CLI overrides, environment, and an optional YAML file.

    Precedence: CLI > environment > config file > defaults. Overrides and the
    config file are keyed by input name (``webhook-url``); an override value of
    None means "not given".
    """
    environ = os.environ if env is None else env
    env_config = environ.get("TEAMS_PUSH_NOTIFY_CONFIG")
    path_str = config_file or env_config
    config_path = Path(path_str).expanduser() if path_str else None

    file_data: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file {config_path} does not exist")
        file_data = _read_config_file(config_path)

    overrides = overrides or {}
    values: Dict[str, Any] = {}
    for input_name, field_name in INPUT_FIELDS.items():
        raw: Any = overrides.get(input_name)
        if raw is None:
            env_value = get_input(input_name, environ)
            raw = env_value if env_value else file_data.get(input_name)
        if raw is None:
            continue
        values[field_name] = _coerce(field_name, raw)

    return ActionInputs(config_path=config_path, **values)
