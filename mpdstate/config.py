# mpdstate/config.py
# host/port lookup: command line > MPD_HOST/MPD_PORT > config.yaml > defaults
import os
import re
import sys
import yaml

from .mpd_conn import DEFAULT_HOST, DEFAULT_PORT

def config_path() -> str:
    return os.environ.get(
        "MPDSTATE_CONFIG",
        os.path.join(os.path.expanduser("~"), ".config", "mpdstate", "config.yaml"),
    )

def load_config(path=None):
    """
    Read the optional YAML config. Missing file -> {}; broken file -> {} plus a note on stderr.
    """
    path = path or config_path()
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        return data
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"[config] load error: {e}", file=sys.stderr)
        return {}

def parse_port(value) -> int:
    """
    Accepts 6600, "6600", "0x19c8" or "014710" (leading 0 is octal, as strtoul
    with base 0 reads it). Raises ValueError outside 1..65535.
    """
    if isinstance(value, int):
        port = value
    else:
        text = str(value).strip()
        if re.fullmatch(r"0[0-7]+", text):
            port = int(text, 8)
        else:
            port = int(text, 0)
    if not 0 < port < 65536:
        raise ValueError(f"port out of range: {value}")
    return port

def resolve(host=None, port=None, path=None):
    """
    Return (host, port) after applying the lookup order above.
    """
    file_cfg = load_config(path)

    host = host or os.environ.get("MPD_HOST") or file_cfg.get("host") or DEFAULT_HOST
    port = port if port is not None else (
        os.environ.get("MPD_PORT") or file_cfg.get("port") or DEFAULT_PORT
    )
    return str(host), parse_port(port)
