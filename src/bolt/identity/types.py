from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from pgpy import PGPKey, PGPUID



Nickname: TypeAlias = str


Passphrase: TypeAlias = str


Identity: TypeAlias = str


ArmoredText: TypeAlias = str



@dataclass(frozen=True)
class KeyPair():
    secret_key: PGPKey
    public_key: PGPKey

    @property
    def user_id(self) -> PGPUID:
        return self.secret_key.userids[0]

    @property
    def identity(self) -> Identity:
        return self.user_id.userid

    @property
    def nickname(self) -> Nickname:
        return self.user_id.name

    @property
    def fingerprint(self) -> str:
        return str(self.secret_key.fingerprint)



class IdentityError(Exception):
    pass


class InvalidNicknameError(IdentityError, ValueError):

    def __init__(self, nickname: Nickname, reason: str) -> None:
        super().__init__(f"Invalid nickname {nickname!r}: {reason}")
        self.nickname = nickname


class KeyFileIOError(IdentityError):

    def __init__(self, file_path: Path, reason: str | None = None) -> None:
        message = f"Unable to access key file {str(file_path)!r}"
        super().__init__(f"{message}: {reason}" if reason else message)
        self.file_path = file_path


class KeyFileNotFoundError(KeyFileIOError):

    def __init__(self, file_path: Path) -> None:
        IdentityError.__init__(self, f"Key file not found: {str(file_path)!r}")
        self.file_path = file_path


class KeyFileCorruptedError(IdentityError):

    def __init__(self, reason: str) -> None:
        super().__init__(f"Key file is corrupted: {reason}")


class KeyOperationError(IdentityError):

    def __init__(self, reason: str) -> None:
        super().__init__(f"Key operation failed: {reason}")


class KeyLockedError(KeyOperationError):

    def __init__(self) -> None:
        IdentityError.__init__(self, "Secret key is locked, unlock it with its passphrase first")


class ConfigError(IdentityError):

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Invalid configuration {source}: {reason}")
        self.source = source


class IncorrectPassphraseError(IdentityError):

    def __init__(self) -> None:
        super().__init__("Incorrect passphrase for the secret key")
