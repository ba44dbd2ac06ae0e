# === project_utils/starter_class.py ===
import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# ENV LOADING
# -----------------------------------------------------------------------------
def load_dotenv_file(dotenv_path: Path) -> None:
    """
    Parse a .env file at `dotenv_path` and set KEY=VALUE pairs
    into os.environ, without overwriting anything already present.
    """
    if not dotenv_path.exists():
        logging.getLogger(__name__).debug(".env file not found at %s", dotenv_path)
        return

    for raw in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        os.environ.setdefault(key.strip(), val.strip().strip('\'"'))

_repo_root = Path(__file__).resolve().parent.parent
load_dotenv_file(_repo_root / ".env")

LOGGER_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# -----------------------------------------------------------------------------
# LOGGING SETUP
# -----------------------------------------------------------------------------
LOG_LEVELS = {
    "DEBUG":    logging.DEBUG,
    "INFO":     logging.INFO,
    "WARNING":  logging.WARNING,
    "ERROR":    logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_console_handler: Optional[logging.Handler] = None


def setup_logger(log_file: Path = Path("logs") / "project_hub.log") -> None:
    """
    Configure root logger once: file + console handlers,
    using the level from LOG_LEVEL.

    Streamlit re-executes the script on every interaction, so the
    console handler is attached only on the first call.
    """
    global _console_handler
    level = LOG_LEVELS.get(LOGGER_LEVEL, logging.INFO)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Basic file logging (no-op if the root logger already has handlers)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        filename=str(log_file),
        filemode="a",
    )

    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setLevel(level)
        _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(_console_handler)

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a named logger (with the above handlers already attached).
    """
    return logging.getLogger(name)

# -----------------------------------------------------------------------------
# Application Context
# -----------------------------------------------------------------------------
class AppContext:
    """
    Holds the parsed configuration from config.yaml and exposes
    helper getters for nested keys, sources, field columns and UI strings.
    """
    def __init__(self, config: Dict[str, Any]):
        self._config = config or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Fetch dotted-path key, or return default if missing."""
        return self._resolve_key_path(key, default)

    def get_required(self, key: str) -> Any:
        """Fetch dotted-path key, or raise KeyError if missing."""
        val = self._resolve_key_path(key, None)
        if val is None:
            raise KeyError(f"Missing required config key: '{key}'")
        return val

    def get_section(self, section: str) -> Dict[str, Any]:
        """Return a top-level dict section or {}."""
        return self._config.get(section) or {}

    def get_fields(self) -> Dict[str, str]:
        """Return the record field -> spreadsheet column mapping."""
        return self.get_required("fields")

    def get_sources(self) -> Dict[str, Any]:
        """Return the 'sources' section (CSV + form URLs)."""
        return self.get_section("sources")

    def get_app_ui(self) -> Dict[str, Any]:
        """Return the 'app' section for UIConfig and the gallery."""
        return self.get_section("app")

    def _resolve_key_path(self, dotted: str, default: Any) -> Any:
        parts = dotted.split(".")
        cur = self._config
        for p in parts:
            if not isinstance(cur, dict) or p not in cur:
                return default
            cur = cur[p]
        return cur

# -----------------------------------------------------------------------------
# Context builder
# -----------------------------------------------------------------------------
_config_cache: Optional[AppContext] = None


def build_context(caller_name: str, config_path: Optional[Path] = None) -> AppContext:
    """
    1) Loads .env (once) from repo root
    2) Finds+parses config.yaml at the repo root (or given path)
    3) Caches+returns an AppContext
    """
    global _config_cache
    if _config_cache is None:
        setup_logger()
        logger = get_logger(__name__)

        load_dotenv_file(_repo_root / ".env")

        cfg_file = config_path or (_repo_root / "config.yaml")
        if not cfg_file.is_file():
            raise FileNotFoundError(f"Cannot find config.yaml at {cfg_file}")
        logger.info("Loading configuration from %s (requested by %s)", cfg_file, caller_name)

        cfg_dict = yaml.safe_load(cfg_file.read_text(encoding="utf-8"))
        _config_cache = AppContext(cfg_dict)

    return _config_cache


def reset_context() -> None:
    """Drop the cached AppContext so the next build_context() re-reads config."""
    global _config_cache
    _config_cache = None
