"""Protocol variants

SRP-6a leaves computation of private key (x) and validation messages (M, M2) to the implementor,
so every existing implementation has its own dialect. Variant classes compute these values on top
of Engine, adding a dialect does not require changes in Engine.
"""

from abc import abstractmethod
from typing import Optional

from pyesrp.engine import Engine
from pyesrp.value import Value


class Variant:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    @abstractmethod
    def calc_x(self, password: str, salt: Value, username: Optional[str] = None) -> Value:
        """Private key (x), derived from password and salt"""
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def calc_m(self, K: Value, A: Value, B: Value, S: Value, salt: Value,  # pylint: disable=invalid-name
               username: Optional[str] = None) -> Value:
        """Validation message (M), proof of session key sent by client"""
        raise NotImplementedError()  # pragma: no cover

    @abstractmethod
    def calc_m2(self, K: Value, A: Value, M: Value, S: Optional[Value] = None) -> Value:  # pylint: disable=invalid-name
        """Response validation message (M2, also known as HAMK), proves that server has a valid verifier"""
        raise NotImplementedError()  # pragma: no cover

    def verify_m(self, expected: Value, received: Value) -> bool:
        return self._engine.crypto.secure_compare(expected, received)


class StandardVariant(Variant):
    """Default variant

    Doesn't involve username and uses K as a key for keyed hash:
      x = KDF(s, p)
      M = HMAC(K, A + s + B)
      M2 = HMAC(K, A + M)

    Note that A, s, B and M are summed as integers, not concatenated.
    """
    def calc_x(self, password: str, salt: Value, username: Optional[str] = None) -> Value:
        return self._engine.crypto.password_hash(salt, password)

    def calc_m(self, K: Value, A: Value, B: Value, S: Value, salt: Value,  # pylint: disable=invalid-name
               username: Optional[str] = None) -> Value:
        total = A.to_int() + salt.to_int() + B.to_int()
        return self._engine.crypto.keyed_hash(K, Value.from_int(total))

    def calc_m2(self, K: Value, A: Value, M: Value, S: Optional[Value] = None) -> Value:  # pylint: disable=invalid-name
        total = A.to_int() + M.to_int()
        return self._engine.crypto.keyed_hash(K, Value.from_int(total))


class LegacyVariant(Variant):
    """Variant compatible with older implementations

      x = KDF(s, p)
      M = MAC(S, A | B)
      M2 = H(A | M | K)
    """
    def calc_x(self, password: str, salt: Value, username: Optional[str] = None) -> Value:
        return self._engine.crypto.password_hash(salt, password)

    def calc_m(self, K: Value, A: Value, B: Value, S: Value, salt: Value,  # pylint: disable=invalid-name
               username: Optional[str] = None) -> Value:
        return self._engine.crypto.keyed_hash(S, Value(A.to_bytes() + B.to_bytes()))

    def calc_m2(self, K: Value, A: Value, M: Value, S: Optional[Value] = None) -> Value:  # pylint: disable=invalid-name
        return self._engine.crypto.hash(A, M, K)


class Rfc2945Variant(Variant):
    """RFC 2945 variant, username is required

    Engine computes k = H(N | g) and u = H(A | B) without padding, so this is not RFC 5054 compatible.

      x = H(s | H(I | ':' | p))
      M = H(H(N) xor H(g) | H(I) | s | A | B | K)
      M2 = H(A | M | K)
    """
    def calc_x(self, password: str, salt: Value, username: Optional[str] = None) -> Value:
        crypto = self._engine.crypto
        identity = crypto.hash(Value(f'{_require(username)}:{password}'.encode()))
        return crypto.hash(salt, identity)

    def calc_m(self, K: Value, A: Value, B: Value, S: Value, salt: Value,  # pylint: disable=invalid-name
               username: Optional[str] = None) -> Value:
        crypto = self._engine.crypto
        h_n = crypto.hash(self._engine.n).to_bytes()
        h_g = crypto.hash(self._engine.g).to_bytes()
        h_xor = Value(bytes(i ^ j for i, j in zip(h_n, h_g)))
        h_i = crypto.hash(Value(_require(username).encode()))
        return crypto.hash(h_xor, h_i, salt, A, B, K)

    def calc_m2(self, K: Value, A: Value, M: Value, S: Optional[Value] = None) -> Value:  # pylint: disable=invalid-name
        return self._engine.crypto.hash(A, M, K)


def _require(username: Optional[str]) -> str:
    if username is None:
        raise ValueError('Username is required by this variant')
    return username
