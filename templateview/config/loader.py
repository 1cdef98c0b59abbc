# templateview/config/loader.py
"""
Handles loading and merging of view configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import fields as dataclass_fields
import structlog

from templateview.exceptions import ConfigError

from .settings import ViewConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".templateview.toml", "templateview.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "templateview"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEYS = {f.name for f in dataclass_fields(ViewConfig)}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("templateview", {})
    return data

def load_and_merge_configs(search_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Reads the user config, then overlays the first project config found in search_dir."""
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    base_dir = search_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
            user_profiles.update(project_profiles)
            merged_toml_data["profiles"] = user_profiles
        merged_toml_data.update(project_settings)
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _known_settings(raw: Dict[str, Any], source: str) -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for key, value in raw.items():
        if key == "profiles":
            continue
        if key not in CONFIG_KEYS:
            log.warning("unknown_config_key_ignored", key=key, source=source)
            continue
        settings[key] = value
    return settings

def load_config(
    profile: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_dir: Optional[Path] = None,
) -> ViewConfig:
    """
    Builds a ViewConfig from config files, an optional named profile, and
    explicit overrides, in that order of increasing precedence. Override
    values of None are treated as "not given".
    """
    raw = load_and_merge_configs(search_dir)
    effective = _known_settings(raw, "config_file")

    if profile:
        profile_values = raw.get("profiles", {}).get(profile)
        if isinstance(profile_values, dict):
            log.info("applying_profile_settings", profile=profile)
            effective.update(_known_settings(profile_values, f"profile:{profile}"))
        else:
            log.warning("profile_not_found_in_config_files", profile_name=profile)

    for key, value in (overrides or {}).items():
        if value is not None:
            effective[key] = value

    try:
        config = ViewConfig(**effective)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid template configuration: {e}") from e
    log.debug("view_config_loaded", template_root=str(config.template_root), profile=profile)
    return config
