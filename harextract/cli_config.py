"""Configuration loading helpers for the CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

# Template shipped inside the package, copied to the user config directory
# on first use.
EXAMPLE_ENV_FILE = Path(__file__).with_name("env.example")


def load_config(
    *,
    config_dir: Path,
    config_env_file: Path,
    cwd: Path,
    load_env: Callable[[Path], bool],
    copy_file: Callable[[Path, Path], str],
    example_file: Path = EXAMPLE_ENV_FILE,
) -> None:
    """Load .env configuration with fallback to user config directory.

    Search order:
    1. .env in current working directory
    2. <config_dir>/.env

    If neither exists, *example_file* is copied to the user config
    directory as a starting point and loaded.
    """
    local_env = cwd / ".env"
    if local_env.is_file():
        load_env(local_env)
        return

    if config_env_file.is_file():
        load_env(config_env_file)
        return

    if not example_file.is_file():
        logging.debug("No .env found and no template at %s", example_file)
        return

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        copy_file(example_file, config_env_file)
    except OSError as exc:
        logging.debug("Could not create %s: %s", config_env_file, exc)
        return

    logging.info(
        "Created config file at %s with the default output layout; "
        "edit it to change HAR_EXTRACT_* defaults.",
        config_env_file,
    )
    load_env(config_env_file)
