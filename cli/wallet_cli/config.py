import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any

CONFIG_DIR = Path.home() / ".wallet-panel"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS: Dict[str, Any] = {
    "service_url": "http://localhost:8080",
    "token_symbol": "NETX",
    "mask_addresses": True,
    "log_level": "WARNING",
    "use_mock": True,
}


class ConfigManager:
    def __init__(self):
        self._ensure_config_dir()
        self.config = self._load_config()

    def _ensure_config_dir(self):
        if not CONFIG_DIR.exists():
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    def _load_config(self) -> Dict:
        if not CONFIG_FILE.exists():
            return {}
        try:
            with open(CONFIG_FILE, "r") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except json.JSONDecodeError:
            return {}

    def save_config(self):
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str):
        return self.config.get(key, DEFAULTS.get(key))

    def set(self, key: str, value):
        self.config[key] = value
        self.save_config()

    def get_service_url(self) -> str:
        return self.get("service_url")

    def set_service_url(self, url: str):
        self.set("service_url", url)

    def get_token_symbol(self) -> str:
        return self.get("token_symbol")

    def get_providers_file(self) -> Optional[str]:
        return self.get("providers_file")

    def masks_addresses(self) -> bool:
        return bool(self.get("mask_addresses"))

    def uses_mock(self) -> bool:
        return bool(self.get("use_mock"))

    def get_log_level(self) -> int:
        level = logging.getLevelName(str(self.get("log_level")).upper())
        return level if isinstance(level, int) else logging.WARNING
