import hashlib
import hmac
from abc import abstractmethod
from enum import Enum
from logging import getLogger
from os import urandom
from typing import Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import constant_time, hashes
from cryptography.hazmat.primitives.hmac import HMAC
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from pyesrp.config import (
    DEFAULT_OPTIONS,
    CryptoOptions,
    DigestAlgorithm,
)
from pyesrp.exceptions import SecurityError
from pyesrp.value import Value

logger = getLogger('pyesrp')

Comparable = Union[Value, bytes]


class CryptoBackend(Enum):
    """Available implementations of crypto primitives"""
    standard = 'standard'  # hashlib and hmac
    openssl = 'openssl'  # cryptography


class Crypto:
    """Crypto primitives used by SRP computations

    Provides:
    - hash: SHA1, SHA256, SHA384, SHA512
    - kdf: PBKDF2 with selected hash, legacy H(salt | password)
    - mac: HMAC with selected hash, legacy H(message | key)

    Backends must produce identical output for identical options, so client and server may use
    different backends.
    """
    def __init__(self, options: CryptoOptions = DEFAULT_OPTIONS) -> None:
        self._options = options

    @property
    def options(self) -> CryptoOptions:
        return self._options

    @property
    def digest(self) -> DigestAlgorithm:
        return self._options.digest

    @property
    @abstractmethod
    def digest_size(self) -> int:
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def _digest(self, data: bytes) -> bytes:
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def _hmac(self, key: bytes, message: bytes) -> bytes:
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def _pbkdf2(self, password: bytes, salt: bytes) -> bytes:
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def _compare(self, a: bytes, b: bytes) -> bool:
        raise NotImplementedError()  # pragma: no cover

    def hash(self, *values: Value) -> Value:
        """One-way hash function H over concatenated bytes of values"""
        return Value(self._digest(b''.join(v.to_bytes() for v in values)))

    def password_hash(self, salt: Value, password: str) -> Value:
        """Password-based key derivation

        Legacy mode hashes hex representation of salt followed by password,
        as it is done by existing implementations.
        """
        if self._options.legacy_kdf:
            return Value(self._digest((salt.to_hex() + password).encode()))
        return Value(self._pbkdf2(password.encode(), salt.to_bytes()))

    def keyed_hash(self, key: Value, message: Value) -> Value:
        if self._options.legacy_mac:
            return self.hash(message, key)
        return Value(self._hmac(key.to_bytes(), message.to_bytes()))

    def secure_compare(self, a: Comparable, b: Comparable) -> bool:
        """Constant time comparison, only length of values may leak"""
        a, b = bytes(a), bytes(b)
        if len(a) != len(b):
            return False
        return self._compare(a, b)

    def random(self, length: int) -> Value:
        """Returns exactly length bytes from OS CSPRNG"""
        if length < 0:
            raise ValueError(f'Random length must not be negative, got {length}')
        try:
            data = urandom(length)
        except (NotImplementedError, OSError) as e:
            logger.error(f'Secure random source is not available: {e}')
            raise SecurityError('Secure random source is not available') from e
        if len(data) != length:
            logger.error(f'Secure random source returned {len(data)} bytes instead of {length}')
            raise SecurityError(f'Secure random source returned {len(data)} bytes instead of {length}')
        return Value(data)

    @staticmethod
    def pad(data: bytes, length: int) -> bytes:
        """Left pads data with zero bytes up to length, never truncates"""
        if len(data) >= length:
            return data
        return b'\x00' * (length - len(data)) + data


class StandardCrypto(Crypto):
    """Crypto primitives based on hashlib and hmac modules"""
    @property
    def digest_size(self) -> int:
        return hashlib.new(self.digest.value).digest_size

    def _digest(self, data: bytes) -> bytes:
        return hashlib.new(self.digest.value, data).digest()

    def _hmac(self, key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, self.digest.value).digest()

    def _pbkdf2(self, password: bytes, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac(self.digest.value, password, salt, self._options.kdf_iterations,
                                   dklen=self.digest_size)

    def _compare(self, a: bytes, b: bytes) -> bool:
        return hmac.compare_digest(a, b)


_ALGORITHMS = {
    DigestAlgorithm.sha1: hashes.SHA1,
    DigestAlgorithm.sha256: hashes.SHA256,
    DigestAlgorithm.sha384: hashes.SHA384,
    DigestAlgorithm.sha512: hashes.SHA512,
}


class OpenSSLCrypto(Crypto):
    """Crypto primitives based on cryptography (OpenSSL) library"""
    def _algorithm(self) -> hashes.HashAlgorithm:
        return _ALGORITHMS[self.digest]()

    @property
    def digest_size(self) -> int:
        return self._algorithm().digest_size

    def _digest(self, data: bytes) -> bytes:
        h = hashes.Hash(self._algorithm(), backend=default_backend())
        h.update(data)
        return h.finalize()

    def _hmac(self, key: bytes, message: bytes) -> bytes:
        h = HMAC(key, self._algorithm(), backend=default_backend())
        h.update(message)
        return h.finalize()

    def _pbkdf2(self, password: bytes, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(algorithm=self._algorithm(), length=self.digest_size, salt=salt,
                         iterations=self._options.kdf_iterations, backend=default_backend())
        return kdf.derive(password)

    def _compare(self, a: bytes, b: bytes) -> bool:
        return constant_time.bytes_eq(a, b)


_BACKENDS = {
    CryptoBackend.standard: StandardCrypto,
    CryptoBackend.openssl: OpenSSLCrypto,
}


def create_crypto(options: CryptoOptions = DEFAULT_OPTIONS, backend: CryptoBackend = CryptoBackend.openssl) -> Crypto:
    logger.debug(f'Crypto backend: {backend.name}, options: {options.to_dict()}')
    return _BACKENDS[backend](options)
