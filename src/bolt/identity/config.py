from dataclasses import dataclass
from typing import overload
from pathlib import Path
import yaml
from loguru import logger

from .types import Nickname, ConfigError



CONFIG_FILE_NAME = "bolt.yaml"



@dataclass(frozen=True, eq=True)
class Config():
    nickname: Nickname | None = None
    key_file_path: Path | None = None



@overload
def load_config(text: str, /) -> Config: ...



@overload
def load_config(file_path: Path, /) -> Config: ...



def load_config(text_or_file_path: str | Path, /) -> Config:
    """
    Parse a YAML configuration document.

    A relative `key_file` is resolved against the folder of the configuration file
    (or the current folder when parsing text).
    """
    if isinstance(text_or_file_path, Path):
        source = repr(str(text_or_file_path))
        try:
            text = text_or_file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(source, f"unable to read it ({e})") from e
        base_folder_path = text_or_file_path.parent
    else:
        source = "text"
        text = text_or_file_path
        base_folder_path = Path.cwd()

    try:
        obj = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(source, f"malformed YAML ({e})") from e

    if not isinstance(obj, dict):
        raise ConfigError(source, f"expected a mapping at the top, got {type(obj).__name__}")

    key_file_path: Path | None = None
    if (key_file := obj.get("key_file")) is not None:
        key_file_path = Path(str(key_file)).expanduser()
        if not key_file_path.is_absolute():
            key_file_path = base_folder_path / key_file_path

    nickname = obj.get("nickname")
    return Config(
        nickname=str(nickname) if nickname is not None else None,
        key_file_path=key_file_path,
    )


def find_config(folder_path: Path | None = None) -> Config | None:
    folder_path = folder_path or Path.cwd()
    while True:
        if (config_file_path := folder_path / CONFIG_FILE_NAME).exists():
            logger.debug("Using configuration from {file_path}", file_path=config_file_path)
            return load_config(config_file_path)

        if ( folder_path / ".git" ).exists():
            logger.warning(f"Reached the git root folder without finding a {CONFIG_FILE_NAME!r} file.")
            break

        if folder_path.parent == folder_path:
            break

        folder_path = folder_path.parent

    return None
