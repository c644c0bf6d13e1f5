import os
import json
from typing import Any, Optional

APP_DIR_NAME = "PassForge"


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def atomic_read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def data_dir() -> str:
    """
    PASSFORGE_HOME if set, else %APPDATA%/PassForge on Windows, else ~/.passforge.
    """
    override = os.getenv("PASSFORGE_HOME")
    if override:
        return override
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, APP_DIR_NAME)
    return os.path.join(os.path.expanduser("~"), ".passforge")


def default_accounts_path() -> str:
    return os.path.join(data_dir(), "accounts.json")


def default_session_path() -> str:
    return os.path.join(data_dir(), "session.json")


def read_json_bytes(b: bytes) -> Any:
    return json.loads(b.decode("utf-8"))


def dump_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")


def read_json_file(path: str, default: Optional[Any] = None) -> Any:
    """Load JSON from *path*; a missing file yields *default*."""
    if not os.path.exists(path):
        return default
    return read_json_bytes(atomic_read_bytes(path))


def write_json_file(path: str, obj: Any) -> None:
    atomic_write_bytes(path, dump_json_bytes(obj))


def remove_file(path: str) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True
