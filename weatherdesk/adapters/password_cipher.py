"""Password encryption compatible with CryptoJS ``AES.encrypt(text, passphrase)``.

The user service decrypts login passwords with a pre-shared passphrase, so
the client must produce the OpenSSL "salted" envelope CryptoJS emits:
``base64("Salted__" + salt[8] + AES-256-CBC(PKCS7(plaintext)))`` with key and
IV derived by ``EVP_BytesToKey`` (MD5, one iteration).

The pre-shared key is not a substitute for transport security; it is kept
because the service expects it.
"""

from __future__ import annotations

import base64
import os
from typing import Callable, Tuple

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from weatherdesk.domain.ports import PasswordCipher

SALT_HEADER = b"Salted__"
_SALT_LEN = 8
_KEY_LEN = 32
_IV_LEN = 16


def _md5(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.MD5())
    digest.update(data)
    return digest.finalize()


def derive_key_iv(passphrase: bytes, salt: bytes) -> Tuple[bytes, bytes]:
    """OpenSSL ``EVP_BytesToKey`` with MD5 and a single iteration."""
    derived = b""
    block = b""
    while len(derived) < _KEY_LEN + _IV_LEN:
        block = _md5(block + passphrase + salt)
        derived += block
    return derived[:_KEY_LEN], derived[_KEY_LEN:_KEY_LEN + _IV_LEN]


class CryptoJsAesCipher(PasswordCipher):
    """Encrypt with a shared passphrase the way CryptoJS does."""

    def __init__(self, passphrase: str, *, salt_factory: Callable[[int], bytes] = os.urandom) -> None:
        if not passphrase:
            raise ValueError("Password encryption key is not configured.")
        self._passphrase = passphrase.encode("utf-8")
        self._salt_factory = salt_factory

    def encrypt(self, plaintext: str) -> str:
        salt = self._salt_factory(_SALT_LEN)
        key, iv = derive_key_iv(self._passphrase, salt)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(SALT_HEADER + salt + ciphertext).decode("ascii")


__all__ = ["CryptoJsAesCipher", "SALT_HEADER", "derive_key_iv"]
