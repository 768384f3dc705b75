from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigError


DEFAULT_API_URL = "https://api.gandi.net"
CONFIG_DIR_ENV = "GANDI_CONFIG_DIR"


@dataclass(frozen=True)
class ConfigPaths:
    config_dir: Path
    token_file: Path
    url_file: Path
    checker_config_file: Path

    @classmethod
    def from_dir(cls, config_dir: Path) -> ConfigPaths:
        return cls(
            config_dir=config_dir,
            token_file=config_dir / "api_token",
            url_file=config_dir / "api_url",
            checker_config_file=config_dir / "domain-checker.json",
        )


@dataclass(frozen=True)
class Credentials:
    token: str
    api_url: str = DEFAULT_API_URL


def default_config_paths(environ: Mapping[str, str] | None = None, home: Path | None = None) -> ConfigPaths:
    """Resolve the config directory once, at process start.

    ``GANDI_CONFIG_DIR`` wins; otherwise ``~/.config/gandi`` is used.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_DIR_ENV)
    if override:
        return ConfigPaths.from_dir(Path(override).expanduser())
    base = home if home is not None else Path.home()
    return ConfigPaths.from_dir(base / ".config" / "gandi")


def read_token(paths: ConfigPaths) -> str:
    token_file = paths.token_file
    if not token_file.exists():
        raise ConfigError(
            f"Token file not found at {token_file}\n"
            f'Create it with: echo "YOUR_PAT" > {token_file} && chmod 600 {token_file}'
        )
    try:
        token = token_file.read_text(encoding="utf-8").strip()
    except PermissionError as exc:
        raise ConfigError(f"Cannot read token file. Check permissions: chmod 600 {token_file}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read token file {token_file}: {exc}") from exc

    if not token:
        raise ConfigError(f"Token file is empty: {token_file}")
    return token


def read_api_url(paths: ConfigPaths) -> str:
    try:
        if paths.url_file.exists():
            url = paths.url_file.read_text(encoding="utf-8").strip()
            if url:
                return url
    except (OSError, UnicodeDecodeError):
        pass
    return DEFAULT_API_URL


def load_credentials(paths: ConfigPaths) -> Credentials:
    return Credentials(token=read_token(paths), api_url=read_api_url(paths))
