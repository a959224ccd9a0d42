# shared_hooks/config_utils.py
import os
from pathlib import Path
from typing import Dict, Any
import toml
from dotenv import find_dotenv, load_dotenv

# --- Ultimate Fallback Defaults ---
# Used when .shared-hooks.toml is missing or a key is not found,
# and no environment variable or runtime override is set.
ULTIMATE_DEFAULTS = {
    "base_url": "https://raw.githubusercontent.com/ginanck/shared-pre-commit-hooks/refs/heads/master",
    "overwrite": "always",
}

CONFIG_FILE_NAME = ".shared-hooks.toml"

# This dictionary will hold configurations loaded from .shared-hooks.toml
_CONFIG_FROM_TOML: Dict[str, Any] = {}

SUPPORTED_SET_PARAMS = {
    "base_url": {
        "env_var": "SHARED_HOOKS_BASE_URL",
        "toml_section": "source",
        "toml_key": "base_url",
        "description": "Raw-content base URL the configuration files are downloaded from (e.g. a fork or mirror)."
    },
    "overwrite": {
        "env_var": "SHARED_HOOKS_OVERWRITE",
        "toml_section": "setup",
        "toml_key": "overwrite",
        "allowed_values": ["always", "prompt", "skip"],
        "description": "What to do with files that already exist: 'always' (overwrite), 'prompt' (ask once), 'skip' (keep them)."
    },
}


def update_runtime_override(param_name: str, value: Any, runtime_overrides: Dict[str, Any], console_obj=None) -> bool:
    """
    Updates a runtime override for a given parameter.
    Validates against SUPPORTED_SET_PARAMS. Returns True if the override was stored.
    """
    param_name_lower = param_name.lower()
    if param_name_lower not in SUPPORTED_SET_PARAMS:
        if console_obj:
            console_obj.print(f"[red]Error: Unknown parameter '{param_name}'. Cannot set override.[/red]")
        return False

    config_details = SUPPORTED_SET_PARAMS[param_name_lower]
    allowed_values = config_details.get("allowed_values")

    if param_name_lower == "base_url":
        value = str(value).strip()
        if not value.startswith(("http://", "https://")):
            if console_obj:
                console_obj.print(f"[red]Error: Invalid value '{value}' for base_url. Must be an http(s) URL.[/red]")
            return False
        value = value.rstrip("/")

    if allowed_values:
        value = str(value).lower()
        if value not in allowed_values:
            if console_obj:
                console_obj.print(f"[red]Error: Invalid value '{value}' for {param_name_lower}. Allowed values: {', '.join(allowed_values)}[/red]")
            return False

    runtime_overrides[param_name_lower] = value
    return True


def load_configuration(console_obj=None):
    """
    Loads the .env file into environment variables and .shared-hooks.toml into _CONFIG_FROM_TOML.
    Only keys known to SUPPORTED_SET_PARAMS are picked up from the TOML sections.
    """
    # Search from the working directory (the consumer repository), not from this package
    load_dotenv(find_dotenv(usecwd=True))
    _CONFIG_FROM_TOML.clear()

    toml_config_path = Path(CONFIG_FILE_NAME)
    if not toml_config_path.exists():
        return

    try:
        loaded_toml = toml.load(toml_config_path)
    except (toml.TomlDecodeError, OSError, UnicodeDecodeError) as e:
        if console_obj:
            console_obj.print(f"[yellow]Warning: Could not load or parse {CONFIG_FILE_NAME}: {e}. Using defaults and environment variables.[/yellow]")
        return

    for param_name, p_config in SUPPORTED_SET_PARAMS.items():
        section = loaded_toml.get(p_config["toml_section"])
        if isinstance(section, dict) and p_config["toml_key"] in section:
            _CONFIG_FROM_TOML[param_name] = section[p_config["toml_key"]]


def get_config_value(param_name: str, runtime_overrides: Dict[str, Any], console_obj=None) -> Any:
    """
    Retrieves a configuration value based on precedence:
    1. Runtime overrides (command-line flags)
    2. Environment variables (including those loaded from .env)
    3. Values from .shared-hooks.toml (_CONFIG_FROM_TOML)
    4. Ultimate hardcoded defaults (ULTIMATE_DEFAULTS)
    Values from layers 2 and 3 that fail validation fall through to the next layer.
    """
    if param_name not in SUPPORTED_SET_PARAMS:
        if console_obj:
            console_obj.print(f"[yellow]Warning: Attempted to get unknown config param '{param_name}'. Using default.[/yellow]")
        return ULTIMATE_DEFAULTS.get(param_name)

    runtime_val = runtime_overrides.get(param_name)
    if runtime_val is not None:
        return runtime_val

    p_config = SUPPORTED_SET_PARAMS[param_name]
    candidates = []
    env_var_name = p_config.get("env_var")
    if env_var_name:
        env_val = os.getenv(env_var_name)
        if env_val:
            candidates.append(("environment variable " + env_var_name, env_val))
    if param_name in _CONFIG_FROM_TOML:
        candidates.append((CONFIG_FILE_NAME, _CONFIG_FROM_TOML[param_name]))

    for origin, candidate in candidates:
        validated: Dict[str, Any] = {}
        if update_runtime_override(param_name, candidate, validated):
            return validated[param_name]
        if console_obj:
            console_obj.print(f"[yellow]Warning: Ignoring invalid {param_name} '{candidate}' from {origin}.[/yellow]")

    return ULTIMATE_DEFAULTS.get(param_name)
