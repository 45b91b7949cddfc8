from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import ConfigNotFound, ConfigParseError, ConfigSchemaError


@dataclass(frozen=True)
class WebShortcut:
    name: str
    url: str


@dataclass(frozen=True)
class SetupConfig:
    editor_theme: str
    editor_extension_ids: Tuple[str, ...]
    cli_extension_ids: Tuple[str, ...]
    web_shortcuts: Tuple[WebShortcut, ...]
    demo_sites: Tuple[str, ...]
    media_player_settings: str
    web_login_url: Optional[str] = None


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    return "json"


def _parse(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"{path}: {e}") from e
    if _detect_format(path) == "yaml":
        try:
            import yaml  # type: ignore
        except ImportError as e:  # pragma: no cover
            raise ConfigParseError("YAML config requested but PyYAML is not available") from e
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"{path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"{path}: {e}") from e


def _require(raw: Dict[str, Any], key: str) -> Any:
    if key not in raw or raw[key] is None:
        raise ConfigSchemaError(f"missing required field '{key}'")
    return raw[key]


def _string(raw: Dict[str, Any], key: str, *, allow_empty: bool = True) -> str:
    value = _require(raw, key)
    if not isinstance(value, str):
        raise ConfigSchemaError(f"'{key}' must be a string, got {type(value).__name__}")
    if not allow_empty and not value.strip():
        raise ConfigSchemaError(f"'{key}' must not be empty")
    return value


def _string_list(raw: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = _require(raw, key)
    if not isinstance(value, list):
        raise ConfigSchemaError(f"'{key}' must be a list, got {type(value).__name__}")
    out: List[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigSchemaError(f"'{key}[{i}]' must be a non-empty string")
        out.append(item.strip())
    return tuple(out)


def _shortcuts(raw: Dict[str, Any], key: str) -> Tuple[WebShortcut, ...]:
    value = _require(raw, key)
    if not isinstance(value, list):
        raise ConfigSchemaError(f"'{key}' must be a list, got {type(value).__name__}")
    out: List[WebShortcut] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ConfigSchemaError(f"'{key}[{i}]' must be an object with 'name' and 'url'")
        try:
            name = _string(item, "name", allow_empty=False)
            url = _string(item, "url", allow_empty=False)
        except ConfigSchemaError as e:
            raise ConfigSchemaError(f"'{key}[{i}]': {e}") from e
        out.append(WebShortcut(name=name, url=url))
    return tuple(out)


def parse_setup_config(raw: Any) -> SetupConfig:
    """Validate an already-decoded document. Unknown keys are ignored."""
    if not isinstance(raw, dict):
        raise ConfigSchemaError(f"config must be an object, got {type(raw).__name__}")

    login_url = raw.get("web_login_url")
    if login_url is not None and (not isinstance(login_url, str) or not login_url.strip()):
        raise ConfigSchemaError("'web_login_url' must be a non-empty string when set")

    return SetupConfig(
        editor_theme=_string(raw, "vscode_theme", allow_empty=False),
        editor_extension_ids=_string_list(raw, "vs_code_extensions"),
        cli_extension_ids=_string_list(raw, "gh_cli_extensions"),
        web_shortcuts=_shortcuts(raw, "pwa_sites"),
        demo_sites=_string_list(raw, "demo_sites"),
        media_player_settings=_string(raw, "vlc_settings"),
        web_login_url=login_url.strip() if login_url else None,
    )


def load_setup_config(path: str) -> SetupConfig:
    p = Path(path).expanduser()
    if not p.is_file():
        raise ConfigNotFound(f"config file not found: {path}")

    raw = _parse(p)
    if not isinstance(raw, dict):
        raise ConfigParseError(f"{path}: top level must be an object/mapping")
    return parse_setup_config(raw)
