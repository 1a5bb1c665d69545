"""Configuration loading and constants for BPMN Manager."""

import os
from pathlib import Path

import yaml

from bpmn_sdk.client import DEFAULT_TIMEOUT
from bpmn_sdk.models import DECISION_FIELDS


# ---------------------------------------------------------------------------
# Connection defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://192.168.164.150:8086"

REQUEST_TIMEOUT = DEFAULT_TIMEOUT

# Locale forced for Persian/Arabic task names
DISPLAY_LOCALE = "fa_IR.utf8"

DEFAULT_DECISIONS_PATH = Path(__file__).parent / "decisions.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is missing or malformed."""


def get_base_url(cli_value: str | None = None) -> str:
    """Resolve the API base URL.

    Resolution order:
    1. Positional command-line argument
    2. BPMN_MANAGER_URL env var
    3. DEFAULT_BASE_URL
    """
    if cli_value:
        return cli_value
    return os.environ.get("BPMN_MANAGER_URL") or DEFAULT_BASE_URL


def get_auth_token() -> str | None:
    """Initial bearer token from BPMN_MANAGER_TOKEN, if set."""
    return os.environ.get("BPMN_MANAGER_TOKEN") or None


def get_log_path() -> Path:
    """Get the dashboard log file path.

    Can be overridden via BPMN_MANAGER_LOG_DIR (used by tests).
    """
    log_dir = os.environ.get("BPMN_MANAGER_LOG_DIR")
    if log_dir:
        return Path(log_dir) / "dashboard.log"
    return Path.cwd() / ".bpmn-manager" / "logs" / "dashboard.log"


def setup_encoding() -> None:
    """Force DISPLAY_LOCALE (Persian, UTF-8) so multi-byte task names render correctly.

    Only the environment is set, so the locale need not be installed on the
    host; a missing one leaves the terminal output unaffected.
    """
    for var in ("LANG", "LC_ALL", "LC_MESSAGES"):
        os.environ[var] = DISPLAY_LOCALE


def load_decision_fields(path: Path | None = None) -> dict[str, tuple[str, ...]]:
    """Load the task-definition key -> decision flags mapping.

    Args:
        path: YAML file to read. Defaults to BPMN_MANAGER_DECISIONS, then the
            packaged decisions.yaml.

    Returns:
        Mapping of task-definition key to the ordered decision flag names
        the completion form should offer.

    Raises:
        ConfigError: If the file is missing, not a mapping, or names a flag
            the completion payload does not have.
    """
    if path is None:
        env_path = os.environ.get("BPMN_MANAGER_DECISIONS")
        path = Path(env_path) if env_path else DEFAULT_DECISIONS_PATH

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read decisions file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in decisions file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Decisions file {path} must be a mapping of task keys")

    mapping: dict[str, tuple[str, ...]] = {}
    for key, fields in raw.items():
        if fields is None:
            fields = []
        if isinstance(fields, str):
            fields = [fields]
        if not isinstance(fields, list):
            raise ConfigError(f"Decision fields for {key!r} must be a list")
        unknown = [f for f in fields if f not in DECISION_FIELDS]
        if unknown:
            raise ConfigError(
                f"Unknown decision fields for {key!r}: {', '.join(map(str, unknown))}"
            )
        mapping[str(key)] = tuple(fields)
    return mapping
