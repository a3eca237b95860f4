# app/utils/json_parser.py
"""
Helpers for reading and writing the JSON bookings file.
"""

import json
import os
import stat
import tempfile
from typing import Optional, Any

NEW_FILE_MODE = 0o644


def safe_parse_json(raw_body: bytes) -> Optional[Any]:
    """Parse JSON bytes safely. Returns None on error."""
    try:
        return json.loads(raw_body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def read_json_file(path: str) -> Optional[Any]:
    """Read and parse a JSON file. Returns None if missing, unreadable or malformed."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError:
        return None
    return safe_parse_json(raw)


def write_json_file(path: str, data: Any) -> None:
    """
    Serialize data to path via a temp file + rename, so readers never see
    a half-written file. Raises OSError on disk errors.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".bookings-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        # mkstemp creates 0600; keep the existing file's mode (0644 for new files)
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            mode = NEW_FILE_MODE
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
