from contextlib import contextmanager, ExitStack
from typing import Any, Generator, overload
from pathlib import Path
import yaml
from loguru import logger
from pgpy import PGPKey, PGPUID
from pgpy.constants import (
    PubKeyAlgorithm,
    KeyFlags,
    HashAlgorithm,
    SymmetricKeyAlgorithm,
    CompressionAlgorithm,
)
from pgpy.errors import PGPError, PGPDecryptionError

from .files import write_private_file
from .types import (
    KeyPair,
    Nickname,
    Passphrase,
    Identity,
    ArmoredText,
    InvalidNicknameError,
    KeyFileIOError,
    KeyFileNotFoundError,
    KeyFileCorruptedError,
    KeyOperationError,
    IncorrectPassphraseError,
)



ISSUER = "bolt"


ISSUER_DOMAIN = "boltchat.net"


IDENTITY_COMMENT = f"generated by {ISSUER}"


IDENTITY_EMAIL = f"identities@{ISSUER_DOMAIN}"


KEY_SIZE = 2048


FORBIDDEN_NICKNAME_CHARACTERS = "()<>\r\n"



def validate_nickname(nickname: Nickname) -> Nickname:
    if not nickname.strip():
        raise InvalidNicknameError(nickname, "it must not be empty")
    if forbidden := sorted({c for c in nickname if c in FORBIDDEN_NICKNAME_CHARACTERS}):
        raise InvalidNicknameError(nickname, f"it must not contain {''.join(forbidden)!r}")
    return nickname


def make_identity(nickname: Nickname) -> Identity:
    return make_user_id(nickname).userid


def make_user_id(nickname: Nickname) -> PGPUID:
    return PGPUID.new(nickname, comment=IDENTITY_COMMENT, email=IDENTITY_EMAIL)


@contextmanager
def unlock_key_pair(key_pair: KeyPair, passphrase: Passphrase) -> Generator[KeyPair, None, None]:
    """
    Decrypt the secret key material for the duration of the block.

    The decrypted material is cleared when the block exits, whatever the way.

    Raises:
        IncorrectPassphraseError: if the passphrase does not unlock the key
    """
    with ExitStack() as exit_stack:
        try:
            exit_stack.enter_context(key_pair.secret_key.unlock(passphrase))
        except PGPDecryptionError as e:
            raise IncorrectPassphraseError() from e
        yield key_pair


def _certify(secret_key: PGPKey, passphrase: Passphrase) -> KeyPair:
    if not secret_key.userids:
        raise KeyFileCorruptedError("the secret key carries no user id")

    public_key = secret_key.pubkey
    key_pair = KeyPair(secret_key=secret_key, public_key=public_key)
    with unlock_key_pair(key_pair, passphrase):
        try:
            verification = public_key.verify(public_key)
        except PGPError as e:
            raise KeyOperationError(f"unable to verify the certification of {key_pair.identity!r}") from e
        if not verification:
            raise KeyOperationError(f"the certification of {key_pair.identity!r} does not verify")

    logger.debug("Certification of {identity!r} verified", identity=key_pair.identity)
    return key_pair


def generate_key_pair(nickname: Nickname, passphrase: Passphrase) -> KeyPair:
    validate_nickname(nickname)

    logger.debug("Generating RSA {key_size} key for {nickname!r}...", key_size=KEY_SIZE, nickname=nickname)
    try:
        secret_key = PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, KEY_SIZE)
        secret_key.add_uid(
            make_user_id(nickname),
            usage={KeyFlags.Sign, KeyFlags.Certify},
            hashes=[HashAlgorithm.SHA256, HashAlgorithm.SHA384, HashAlgorithm.SHA512],
            ciphers=[SymmetricKeyAlgorithm.AES256, SymmetricKeyAlgorithm.AES192, SymmetricKeyAlgorithm.AES128],
            compression=[CompressionAlgorithm.ZLIB, CompressionAlgorithm.ZIP, CompressionAlgorithm.Uncompressed],
        )
        secret_key.protect(passphrase, SymmetricKeyAlgorithm.AES256, HashAlgorithm.SHA256)
    except (PGPError, ValueError, TypeError) as e:
        raise KeyOperationError(f"unable to generate a key pair for {nickname!r}") from e

    key_pair = _certify(secret_key, passphrase)
    logger.info("Key pair {fingerprint} generated for {identity!r}", fingerprint=key_pair.fingerprint, identity=key_pair.identity)
    return key_pair



@overload
def load_key_pair(text: str, passphrase: Passphrase, /) -> KeyPair: ...



@overload
def load_key_pair(file_path: Path, passphrase: Passphrase, /) -> KeyPair: ...



def load_key_pair(text_or_file_path: str | Path, passphrase: Passphrase, /) -> KeyPair:
    blob: str | bytes
    if isinstance(text_or_file_path, Path):
        logger.debug("Loading key pair from {file_path}...", file_path=text_or_file_path)
        try:
            blob = text_or_file_path.read_bytes()
        except FileNotFoundError as e:
            raise KeyFileNotFoundError(text_or_file_path) from e
        except OSError as e:
            raise KeyFileIOError(text_or_file_path, e.strerror) from e
    else:
        blob = text_or_file_path

    return _certify(_parse_secret_key(blob), passphrase)


def _parse_secret_key(blob: str | bytes) -> PGPKey:
    try:
        secret_key, _ = PGPKey.from_blob(blob)
        is_public = secret_key.is_public
        is_protected = not is_public and secret_key.is_protected
    # PGPy surfaces malformed packets as a wide range of exception types, and
    # leaves an empty key behind when no key packet is found
    except Exception as e:
        raise KeyFileCorruptedError("it does not hold a valid armored private key block") from e

    if is_public:
        raise KeyFileCorruptedError("it holds a public key instead of a private key")

    if not is_protected:
        raise KeyFileCorruptedError("the private key is not protected by a passphrase")

    return secret_key


def save_secret_key(key_pair: KeyPair, file_path: Path) -> None:
    if not key_pair.secret_key.is_protected:
        raise KeyOperationError("refusing to save a secret key which is not protected by a passphrase")

    try:
        write_private_file(file_path, str(key_pair.secret_key))
    except OSError as e:
        raise KeyFileIOError(file_path, e.strerror) from e
    logger.info("Secret key {fingerprint} saved to {file_path}", fingerprint=key_pair.fingerprint, file_path=file_path)


def armor_public_key(key_pair: KeyPair) -> ArmoredText:
    return str(key_pair.public_key)


def describe_key_pair(key_pair: KeyPair) -> dict[str, Any]:
    secret_key = key_pair.secret_key
    return {
        "identity": key_pair.identity,
        "nickname": key_pair.nickname,
        "fingerprint": key_pair.fingerprint,
        "key_id": secret_key.fingerprint.keyid,
        "algorithm": secret_key.key_algorithm.name,
        "key_size": int(secret_key.key_size),
        "created": secret_key.created.isoformat(),
    }


def dump_key_pair_description(key_pair: KeyPair) -> str:
    content = "---\n"
    content += yaml.dump(describe_key_pair(key_pair), sort_keys=False)
    return content
