from __future__ import annotations

from pathlib import Path
import os

from dotenv import find_dotenv, load_dotenv


def resolve_env_path(dotenv_path: Path | None = None, *, env_var: str = "PALM_ENV_PATH") -> Path | None:
    """
    Pick the .env file to load: an explicit path, then $PALM_ENV_PATH, then
    the nearest .env found walking up from the cwd.
    """
    if dotenv_path:
        return Path(dotenv_path)

    env_path = os.getenv(env_var)
    if env_path:
        return Path(env_path).expanduser()

    found = find_dotenv(usecwd=True)
    return Path(found) if found else None


def load_env(dotenv_path: Path | None = None, *, override: bool = False) -> bool:
    """Load environment variables from a .env file. Returns False when none was found."""
    path = resolve_env_path(dotenv_path)
    if not path or not path.exists():
        return False
    return bool(load_dotenv(path, override=override))
