from .app import app
from .types import (
    KeyPair,
    Nickname,
    Passphrase,
    Identity,
    ArmoredText,
    IdentityError,
    InvalidNicknameError,
    KeyFileIOError,
    KeyFileNotFoundError,
    KeyFileCorruptedError,
    KeyOperationError,
    KeyLockedError,
    IncorrectPassphraseError,
    ConfigError,
)
from .key_pair import (
    generate_key_pair,
    load_key_pair,
    save_secret_key,
    armor_public_key,
    unlock_key_pair,
    describe_key_pair,
    dump_key_pair_description,
    make_identity,
    make_user_id,
)
from .signature import sign_content
from .config import Config, load_config, find_config
from .passphrase import find_passphrase


__all__ = [
    "app",
    "KeyPair",
    "Nickname",
    "Passphrase",
    "Identity",
    "ArmoredText",
    "IdentityError",
    "InvalidNicknameError",
    "KeyFileIOError",
    "KeyFileNotFoundError",
    "KeyFileCorruptedError",
    "KeyOperationError",
    "KeyLockedError",
    "IncorrectPassphraseError",
    "ConfigError",
    "generate_key_pair",
    "load_key_pair",
    "save_secret_key",
    "armor_public_key",
    "unlock_key_pair",
    "describe_key_pair",
    "dump_key_pair_description",
    "make_identity",
    "make_user_id",
    "sign_content",
    "Config",
    "load_config",
    "find_config",
    "find_passphrase",
]
