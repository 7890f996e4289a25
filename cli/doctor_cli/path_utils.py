import re
from pathlib import Path

_WINDOWS_PATH_RE = re.compile(r"^[A-Za-z]:([\\/]|$)")

CONFIG_SUFFIXES = (".toml", ".json", ".yaml", ".yml", ".py")


def looks_like_windows_path(value: str) -> bool:
    if not value:
        return False
    value = value.strip()
    return bool(_WINDOWS_PATH_RE.match(value)) or ("\\" in value)


def looks_like_config_path(value: str) -> bool:
    if not value:
        return False
    value = value.strip()
    if value.startswith(("{", "[")):
        return False
    if "/" in value or looks_like_windows_path(value):
        return True
    return value.lower().endswith(CONFIG_SUFFIXES) or Path(value).is_file()
