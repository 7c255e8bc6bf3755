from pathlib import Path
from loguru import logger
import os

from .types import Passphrase



PASSPHRASE_ENV_VAR = "BOLT_PASSPHRASE"


PASSPHRASE_FILE_NAME = "bolt.passphrase"



def find_passphrase(folder_path: Path | None = None) -> Passphrase | None:
    if (passphrase := os.getenv(PASSPHRASE_ENV_VAR)) is not None:
        logger.debug("Using passphrase from the {env_var} environment variable", env_var=PASSPHRASE_ENV_VAR)
        return passphrase

    folder_path = folder_path or Path.cwd()
    while True:
        if (passphrase_file_path := folder_path / PASSPHRASE_FILE_NAME).exists():
            logger.debug("Using passphrase from {file_path}", file_path=passphrase_file_path)
            return passphrase_file_path.read_text(encoding="utf-8").rstrip("\r\n")

        if ( folder_path / ".git" ).exists():
            logger.warning(f"Reached the git root folder without finding a {PASSPHRASE_FILE_NAME!r} file.")
            break

        if folder_path.parent == folder_path:
            break

        folder_path = folder_path.parent

    return None
