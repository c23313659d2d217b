"""Crypto options of pyesrp"""

from enum import Enum
from logging import getLogger
from typing import NamedTuple

from pyesrp.exceptions import ConfigurationError

logger = getLogger('pyesrp')

DEFAULT_KDF_ITERATIONS = 20000


class DigestAlgorithm(Enum):
    """Supported digest algorithms, value is the hashlib name"""
    sha1 = 'sha1'  # 160 bit
    sha256 = 'sha256'
    sha384 = 'sha384'
    sha512 = 'sha512'


class CryptoOptions(NamedTuple):
    """Options of crypto primitives

    legacy_kdf switches password hash from PBKDF2 to a single digest H(s | p)
    legacy_mac switches keyed hash from HMAC to H(message | key)
    """
    digest: DigestAlgorithm = DigestAlgorithm.sha256
    legacy_kdf: bool = False
    legacy_mac: bool = False
    kdf_iterations: int = DEFAULT_KDF_ITERATIONS

    @classmethod
    def from_dict(cls, _dict: dict) -> 'CryptoOptions':
        digest_name = _dict.get('digest', DEFAULT_OPTIONS.digest.value)
        try:
            digest = DigestAlgorithm(digest_name)
        except ValueError:
            _fail(f'Unsupported digest algorithm: {digest_name!r}')

        kdf_iterations = _dict.get('kdf_iterations', DEFAULT_OPTIONS.kdf_iterations)
        if isinstance(kdf_iterations, bool) or not isinstance(kdf_iterations, int) or kdf_iterations < 1:
            _fail(f'kdf_iterations must be a positive integer, got {kdf_iterations!r}')

        return cls(
            digest=digest,
            legacy_kdf=_flag(_dict, 'legacy_kdf', DEFAULT_OPTIONS.legacy_kdf),
            legacy_mac=_flag(_dict, 'legacy_mac', DEFAULT_OPTIONS.legacy_mac),
            kdf_iterations=kdf_iterations,
        )

    def to_dict(self) -> dict:
        return {
            'digest': self.digest.value,
            'legacy_kdf': self.legacy_kdf,
            'legacy_mac': self.legacy_mac,
            'kdf_iterations': self.kdf_iterations,
        }


# sha256, PBKDF2 and HMAC
DEFAULT_OPTIONS = CryptoOptions()


def _flag(_dict: dict, name: str, default: bool) -> bool:
    # bool only, a 'false' string is truthy
    value = _dict.get(name, default)
    if not isinstance(value, bool):
        _fail(f'{name} must be a boolean, got {value!r}')
    return value


def _fail(message: str) -> None:
    logger.error(message)
    raise ConfigurationError(message)
