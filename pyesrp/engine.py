from logging import getLogger

from pyesrp.crypto import Crypto
from pyesrp.exceptions import ConfigurationError
from pyesrp.group import Group
from pyesrp.value import Value

logger = getLogger('pyesrp')


class Engine:
    """SRP-6a values computation

    Computes everything that is common to all protocol variants. Variant specific values
    (x, M and M2) are computed by pyesrp.variant classes on top of the engine.

    All arithmetic is done modulo N: "a^b" means "a^b mod N" and B gets an additional
    "mod N" in the end.

    N - large safe prime (N = 2q+1, where q is prime)
    g - generator modulo N
    k - multiplier parameter, k = H(N | g)
    s - salt
    I - username
    p - cleartext password
    u - random scrambling parameter
    a, b - secret ephemeral values
    A, B - public ephemeral values
    x - private key (derived from p and s)
    v - password verifier
    S - premaster secret
    K - session key
    """
    def __init__(self, crypto: Crypto, group: Group) -> None:
        n, g = group.n.to_int(), group.g.to_int()
        if n < 3 or n % 2 == 0:
            logger.error(f'Degenerate group modulus: {n}')
            raise ConfigurationError('Group modulus N must be an odd number greater than 2')
        if not 1 < g < n:
            logger.error(f'Degenerate group generator: {g}')
            raise ConfigurationError('Group generator g must be in range (1, N)')

        self._crypto = crypto
        self._group = group
        self._n = n
        self._k = crypto.hash(group.n, group.g)
        self._k_computed = True
        logger.debug(f'Engine created for {group!r}, k: {self._k.to_hex()}')

    @property
    def crypto(self) -> Crypto:
        return self._crypto

    @property
    def group(self) -> Group:
        return self._group

    @property
    def n(self) -> Value:
        return self._group.n

    @property
    def g(self) -> Value:
        return self._group.g

    @property
    def k(self) -> Value:
        """Multiplier parameter, k = H(N | g)"""
        if not self._k_computed:
            return self._crypto.hash(self.n, self.g)
        return self._k

    def calc_v(self, x: Value) -> Value:
        """Password verifier, v = g^x"""
        return self._mod_exp(self.g.to_int(), x.to_int())

    def calc_a(self, a: Value) -> Value:
        """Public client ephemeral value, A = g^a

        Server must abort authentication if A % N == 0, see is_zero_mod_n
        """
        return self._mod_exp(self.g.to_int(), a.to_int())

    def calc_b(self, b: Value, v: Value) -> Value:
        """Public server ephemeral value, B = (k * v + g^b) % N

        Client must abort authentication if B % N == 0, see is_zero_mod_n
        """
        g_b = self._mod_exp(self.g.to_int(), b.to_int()).to_int()
        return Value.from_int((self.k.to_int() * v.to_int() + g_b) % self._n)

    def calc_u(self, A: Value, B: Value) -> Value:  # pylint: disable=invalid-name
        """Random scrambling parameter, u = H(A | B)"""
        return self._crypto.hash(A, B)

    def calc_client_s(self, B: Value, a: Value, x: Value, u: Value) -> Value:  # pylint: disable=invalid-name
        """Client premaster secret, S = (B - (k * g^x)) ^ (a + (u * x))"""
        g_x = self._mod_exp(self.g.to_int(), x.to_int()).to_int()
        base = B.to_int() - self.k.to_int() * g_x
        exponent = a.to_int() + u.to_int() * x.to_int()
        return self._mod_exp(base, exponent)

    def calc_server_s(self, A: Value, b: Value, v: Value, u: Value) -> Value:  # pylint: disable=invalid-name
        """Server premaster secret, S = (A * v^u) ^ b"""
        v_u = self._mod_exp(v.to_int(), u.to_int()).to_int()
        return self._mod_exp(A.to_int() * v_u, b.to_int())

    def calc_k(self, S: Value) -> Value:  # pylint: disable=invalid-name
        """Session key, K = H(S)

        Both sides compute it independently and may use it as a key for further symmetric encryption.
        """
        return self._crypto.hash(S)

    def is_zero_mod_n(self, value: Value) -> bool:
        """Returns True if value % N == 0, such A or B values must abort authentication"""
        return value.to_int() % self._n == 0

    def _mod_exp(self, base: int, exponent: int) -> Value:
        """base^exponent mod N

        Base is reduced with floored modulo first, it is negative after subtraction in client S.
        """
        return Value.from_int(pow(base % self._n, exponent, self._n))
