"""Environment helpers for Docker-style ``*_FILE`` secrets."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> Optional[str]:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "env.secret_file.unreadable",
            extra={"key": key, "path": file_path, "error": str(exc)},
        )
        return None


def load_secret_file_variables(environ: Optional[Dict[str, str]] = None) -> None:
    """
    Expose ``KEY_FILE`` contents as ``KEY`` unless ``KEY`` is already set.

    Used for values such as ``BROKER_URL_FILE`` when the context broker
    address is mounted as a secret. Unreadable files are logged and skipped.
    """
    env = os.environ if environ is None else environ

    for key, file_path in list(env.items()):
        if not key.endswith(_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(_FILE_SUFFIX)]
        if env.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is not None:
            env[target_key] = value


load_secret_file_variables()
