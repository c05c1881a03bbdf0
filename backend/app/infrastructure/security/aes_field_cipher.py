"""AES-256-CBC field cipher — protects a single text attribute at rest.

Encoded format:
    <iv-hex>:<ciphertext-hex>

The 32-byte working key is stretched from the configured secret with scrypt
and a constant salt, once per cipher instance. Every encryption draws a
fresh 16-byte IV, so equal plaintexts never produce equal encodings.
"""

import logging
import os
import re
from collections.abc import Callable

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from app.application.interfaces import FieldCipher

logger = logging.getLogger(__name__)

# ── Key derivation / cipher parameters ───────────────────────────────
KEY_DERIVATION_SALT = b"salt"
KEY_SIZE = 32
IV_SIZE = 16
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1

_SEPARATOR = ":"
_HEX_FIELD = re.compile(r"[0-9a-fA-F]+")

DecryptErrorHook = Callable[[str, Exception], None]


def _log_decrypt_failure(encoded: str, error: Exception) -> None:
    """Default failure hook: warn without echoing the payload."""
    logger.warning(
        "Field decryption failed (%s: %s); returning input unchanged (length=%d)",
        type(error).__name__,
        error,
        len(encoded) if isinstance(encoded, str) else -1,
    )


def derive_key(secret: str) -> bytes:
    """Stretch ``secret`` into a fixed-length AES key."""
    kdf = Scrypt(
        salt=KEY_DERIVATION_SALT,
        length=KEY_SIZE,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )
    return kdf.derive(secret.encode("utf-8"))


class AESFieldCipher(FieldCipher):
    """Reversible encryption of one string field with a random IV per call.

    Usage:
        cipher = AESFieldCipher(settings.encryption_key)
        token = cipher.encrypt("Juan García")
        cipher.decrypt(token)   # → "Juan García"

    ``decrypt`` never raises. Failures are passed to ``on_error`` (default:
    a warning on this module's logger) and the input is returned as-is.
    """

    def __init__(self, secret: str, on_error: DecryptErrorHook | None = None):
        if not secret:
            raise ValueError("An encryption secret is required to build the field cipher")
        self._key = derive_key(secret)
        self._on_error = on_error or _log_decrypt_failure
        logger.debug("Field cipher initialised (AES-256-CBC, scrypt-derived key)")

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_SIZE)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return f"{iv.hex()}{_SEPARATOR}{ciphertext.hex()}"

    def decrypt(self, encoded: str) -> str:
        try:
            return self._decrypt(encoded)
        except Exception as exc:
            self._report(encoded, exc)
            return encoded

    def _report(self, encoded: str, error: Exception) -> None:
        try:
            self._on_error(encoded, error)
        except Exception:
            logger.exception("Decrypt failure hook raised; failure was %s", type(error).__name__)

    def _decrypt(self, encoded: str) -> str:
        parts = encoded.split(_SEPARATOR)
        if len(parts) != 2 or not all(_HEX_FIELD.fullmatch(p) for p in parts):
            raise ValueError("Invalid encrypted field format")

        iv = bytes.fromhex(parts[0])
        ciphertext = bytes.fromhex(parts[1])
        if len(iv) != IV_SIZE:
            raise ValueError(f"Invalid IV length: {len(iv)}")

        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        data = unpadder.update(padded) + unpadder.finalize()
        return data.decode("utf-8")
