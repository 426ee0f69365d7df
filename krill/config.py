"""
Configuration for the krill text editor.

Settings live in ~/krill/config/krill.conf as plain `key=value` lines. Unknown keys
and malformed values are logged and ignored so a broken config never stops the editor.
"""
import os
from dataclasses import dataclass, field

from krill import logger

CONFIG_DIR = os.path.expanduser("~/krill/config")
CONF_PATH = os.path.join(CONFIG_DIR, "krill.conf")

DEFAULT_MODE_COLORS = {
    "normal": "yellow",
    "insert": "green",
    "command": "red",
}

@dataclass
class Config:
    frame_interval: float = 1 / 60
    log_file: str = "krill.log"
    expressions: bool = True
    plugins: list = field(default_factory=lambda: ["fps"])
    mode_colors: dict = field(default_factory=lambda: dict(DEFAULT_MODE_COLORS))

def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("on", "true", "yes", "1"):
        return True
    if lowered in ("off", "false", "no", "0"):
        return False
    raise ValueError(f"not a boolean: {value!r}")

def apply_setting(config: Config, key: str, value: str) -> None:
    """Apply a single `key=value` pair to `config`. Raises ValueError on bad input."""
    if key == "fps":
        fps = float(value)
        if fps <= 0:
            raise ValueError("fps must be positive")
        config.frame_interval = 1 / fps
    elif key == "log_file":
        config.log_file = os.path.expanduser(value)
    elif key == "expressions":
        config.expressions = _parse_bool(value)
    elif key == "plugins":
        config.plugins = [name.strip() for name in value.split(",") if name.strip()]
    elif key.startswith("color."):
        mode = key[len("color."):]
        if mode not in DEFAULT_MODE_COLORS:
            raise ValueError(f"unknown mode {mode!r}")
        config.mode_colors[mode] = value
    else:
        raise ValueError(f"unknown setting {key!r}")

def load_config(path: str = None) -> Config:
    """
    Load settings from `path` (default: $KRILL_CONFIG or ~/krill/config/krill.conf).
    A missing file yields the defaults.
    """
    if path is None:
        path = os.environ.get("KRILL_CONFIG", CONF_PATH)
    config = Config()
    if not os.path.isfile(path):
        return config
    with open(path, 'r', encoding='utf-8') as f:
        for number, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                logger.log(f"[config] {path}:{number}: expected key=value")
                continue
            key, value = line.split("=", 1)
            try:
                apply_setting(config, key.strip(), value.strip())
            except ValueError as e:
                logger.log(f"[config] {path}:{number}: {e}")
    return config
