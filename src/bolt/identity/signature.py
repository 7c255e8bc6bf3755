from loguru import logger
from pgpy import PGPMessage
from pgpy.constants import CompressionAlgorithm
from pgpy.errors import PGPError

from .types import KeyPair, ArmoredText, KeyLockedError, KeyOperationError



def sign_content(key_pair: KeyPair, content: bytes) -> ArmoredText:
    """
    Produce an armored detached signature over the content.

    The content is wrapped as an uncompressed binary literal message with an empty
    file name, only the signature packet is kept. The secret key must be unlocked
    (see `unlock_key_pair`).

    Raises:
        KeyLockedError: if the secret key is not unlocked
        KeyOperationError: if the signature cannot be produced
    """
    secret_key = key_pair.secret_key
    if not secret_key.is_unlocked:
        raise KeyLockedError()

    message = PGPMessage.new(content, format="b", compression=CompressionAlgorithm.Uncompressed)
    try:
        signature = secret_key.sign(message)
    except (PGPError, ValueError, TypeError) as e:
        raise KeyOperationError(f"unable to sign {len(content)} bytes with {key_pair.fingerprint}") from e

    logger.debug("Signed {size} bytes with {fingerprint}", size=len(content), fingerprint=key_pair.fingerprint)
    return str(signature)
