"""RSA key storage indexed by key identifier (``kid``)."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from shop.auth.errors import UnknownKeyError

log = logging.getLogger(__name__)

KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537


def generate_private_key() -> rsa.RSAPrivateKey:
    """Generate a fresh 2048-bit RSA private key."""
    return rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=KEY_SIZE)


def private_key_pem(key: rsa.RSAPrivateKey) -> bytes:
    """Serialize a private key as an unencrypted PKCS#1 PEM block."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_key_pem(key: rsa.RSAPrivateKey | rsa.RSAPublicKey) -> bytes:
    """Serialize the public half of ``key`` as a SubjectPublicKeyInfo PEM block."""
    public = key.public_key() if isinstance(key, rsa.RSAPrivateKey) else key
    return public.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


class KeyStore:
    """
    In-memory mapping of ``kid`` to RSA private keys.

    Keys are usually loaded from a folder of ``<kid>.pem`` files; the file stem
    is the key identifier. :meth:`public_key` is the lookup function handed to
    :class:`~shop.auth.tokens.TokenVerifier`.
    """

    def __init__(self, keys: dict[str, rsa.RSAPrivateKey] | None = None) -> None:
        self._keys: dict[str, rsa.RSAPrivateKey] = dict(keys or {})
        self._lock = RLock()

    @classmethod
    def from_folder(cls, folder: str | Path) -> KeyStore:
        """Load every ``*.pem`` private key found in ``folder``.

        :raises FileNotFoundError: When ``folder`` does not exist.
        :raises ValueError: When a file is not a PEM-encoded RSA private key.
        """
        path = Path(folder)
        if not path.is_dir():
            raise FileNotFoundError(f"Key folder not found: {path}")

        store = cls()
        for pem in sorted(path.glob("*.pem")):
            key = serialization.load_pem_private_key(pem.read_bytes(), password=None)
            if not isinstance(key, rsa.RSAPrivateKey):
                raise ValueError(f"{pem.name} is not an RSA private key")
            store.add(pem.stem, key)
        log.info("Loaded %d signing key(s) from %s", len(store), path)
        return store

    def add(self, kid: str, key: rsa.RSAPrivateKey) -> None:
        """Register ``key`` under ``kid``, replacing any previous key."""
        with self._lock:
            self._keys[kid] = key

    def private_key(self, kid: str) -> rsa.RSAPrivateKey:
        """Return the private key for ``kid``.

        :raises UnknownKeyError: When ``kid`` is not registered.
        """
        with self._lock:
            try:
                return self._keys[kid]
            except KeyError:
                raise UnknownKeyError(kid) from None

    def public_key(self, kid: str) -> rsa.RSAPublicKey:
        """Return the public key for ``kid``.

        :raises UnknownKeyError: When ``kid`` is not registered.
        """
        return self.private_key(kid).public_key()

    def kids(self) -> list[str]:
        with self._lock:
            return sorted(self._keys)

    def __contains__(self, kid: object) -> bool:
        with self._lock:
            return kid in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
