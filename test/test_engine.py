from unittest import TestCase

from pyesrp.config import CryptoOptions, DigestAlgorithm
from pyesrp.crypto import OpenSSLCrypto, StandardCrypto
from pyesrp.engine import Engine
from pyesrp.exceptions import ConfigurationError
from pyesrp.group import GROUP_1024, GROUP_2048, Group
from pyesrp.value import Value

N = 23
G = 5
TOY_GROUP = Group(N, G)
TOY_K_SHA256 = '39d286a801db89a2f979077840871ce15d3ceae50f2c2e0c156f57b89390804e'
TOY_K_SHA1 = '97d6757ddf67a009fb86fcbb956d795d2bc9458c'


class TestEngine(TestCase):
    def setUp(self):
        self.crypto = StandardCrypto()
        self.engine = Engine(self.crypto, TOY_GROUP)
        self.k = self.engine.k.to_int()

    def test_degenerate_group(self):
        for n, g in ((0, 2), (1, 2), (2, 1), (22, 5), (23, 0), (23, 1), (23, 23), (23, 24)):
            with self.subTest(n=n, g=g):
                with self.assertRaises(ConfigurationError):
                    Engine(self.crypto, Group(n, g))

    def test_properties(self):
        self.assertIs(self.engine.crypto, self.crypto)
        self.assertIs(self.engine.group, TOY_GROUP)
        self.assertEqual(self.engine.n, Value.from_int(N))
        self.assertEqual(self.engine.g, Value.from_int(G))

    def test_k(self):
        self.assertEqual(self.engine.k.to_hex(), TOY_K_SHA256)
        self.assertEqual(Engine(StandardCrypto(CryptoOptions(DigestAlgorithm.sha1)), TOY_GROUP).k.to_hex(), TOY_K_SHA1)
        self.assertEqual(self.engine.k, self.crypto.hash(Value.from_int(N), Value.from_int(G)))

    def test_k_not_computed(self):
        self.engine._k_computed = False
        self.engine._k = Value(b'')
        self.assertEqual(self.engine.k.to_hex(), TOY_K_SHA256)

    def test_calc_v(self):
        self.assertEqual(self.engine.calc_v(Value.from_int(6)), Value.from_int(8))  # 5^6 % 23
        self.assertEqual(self.engine.calc_v(Value.from_int(0)), Value.from_int(1))

    def test_calc_a(self):
        self.assertEqual(self.engine.calc_a(Value.from_int(6)), Value.from_int(8))
        self.assertEqual(self.engine.calc_a(Value.from_int(22)), Value.from_int(1))  # Fermat's little theorem

    def test_calc_b(self):
        b, v = Value.from_int(6), Value.from_int(3)
        expected = (self.k * 3 + 8) % N
        self.assertEqual(self.engine.calc_b(b, v), Value.from_int(expected))
        self.assertLess(self.engine.calc_b(b, v).to_int(), N)

    def test_calc_u(self):
        A, B = Value.from_int(8), Value.from_int(19)
        self.assertEqual(self.engine.calc_u(A, B), self.crypto.hash(A, B))
        self.assertNotEqual(self.engine.calc_u(A, B), self.engine.calc_u(B, A))

    def test_calc_client_s_negative_base(self):
        B, a, x, u = Value.from_int(1), Value.from_int(4), Value.from_int(6), Value.from_int(3)
        base = 1 - self.k * 8
        self.assertLess(base, 0)

        expected = pow(base % N, 4 + 3 * 6, N)
        result = self.engine.calc_client_s(B, a, x, u)
        self.assertEqual(result, Value.from_int(expected))
        self.assertTrue(0 <= result.to_int() < N)

    def test_calc_server_s(self):
        A, b, v, u = Value.from_int(8), Value.from_int(6), Value.from_int(3), Value.from_int(2)
        expected = pow(8 * pow(3, 2, N), 6, N)
        self.assertEqual(self.engine.calc_server_s(A, b, v, u), Value.from_int(expected))

    def test_calc_k(self):
        S = Value.from_int(12)
        self.assertEqual(self.engine.calc_k(S), self.crypto.hash(S))
        self.assertEqual(len(self.engine.calc_k(S)), 32)

    def test_is_zero_mod_n(self):
        self.assertTrue(self.engine.is_zero_mod_n(Value.from_int(0)))
        self.assertTrue(self.engine.is_zero_mod_n(Value(b'')))
        self.assertTrue(self.engine.is_zero_mod_n(Value.from_int(N)))
        self.assertTrue(self.engine.is_zero_mod_n(Value.from_int(N * 5)))
        self.assertFalse(self.engine.is_zero_mod_n(Value.from_int(1)))
        self.assertFalse(self.engine.is_zero_mod_n(Value.from_int(N + 1)))

    def test_shared_premaster_secret(self):
        for crypto, group in ((StandardCrypto(), TOY_GROUP),
                              (StandardCrypto(CryptoOptions(DigestAlgorithm.sha1)), GROUP_1024),
                              (OpenSSLCrypto(CryptoOptions(DigestAlgorithm.sha512)), GROUP_2048)):
            engine = Engine(crypto, group)
            for _ in range(5):
                x = crypto.hash(crypto.random(16))
                a, b = crypto.random(32), crypto.random(32)

                v = engine.calc_v(x)
                A = engine.calc_a(a)
                B = engine.calc_b(b, v)
                u = engine.calc_u(A, B)

                client_s = engine.calc_client_s(B, a, x, u)
                server_s = engine.calc_server_s(A, b, v, u)
                self.assertEqual(client_s, server_s)
                self.assertEqual(engine.calc_k(client_s), engine.calc_k(server_s))

                for value in (v, A, B, client_s, server_s):
                    self.assertLess(value.to_int(), group.n.to_int())

    def test_wrong_private_key(self):
        engine = Engine(self.crypto, GROUP_1024)
        x = self.crypto.password_hash(Value.from_int(1117), 'verysecure')
        wrong_x = self.crypto.password_hash(Value.from_int(1117), 'notsecure')
        a, b = self.crypto.random(32), self.crypto.random(32)

        v = engine.calc_v(x)
        A, B = engine.calc_a(a), engine.calc_b(b, v)
        u = engine.calc_u(A, B)

        self.assertNotEqual(engine.calc_client_s(B, a, wrong_x, u), engine.calc_server_s(A, b, v, u))

    def test_backends_interoperate(self):
        client = Engine(StandardCrypto(), GROUP_1024)
        server = Engine(OpenSSLCrypto(), GROUP_1024)
        self.assertEqual(client.k, server.k)

        x = client.crypto.password_hash(Value.from_int(1117), 'verysecure')
        a, b = Value.from_int(1234567), Value.from_int(7654321)
        v = server.calc_v(x)
        A, B = client.calc_a(a), server.calc_b(b, v)

        self.assertEqual(client.calc_client_s(B, a, x, client.calc_u(A, B)),
                         server.calc_server_s(A, b, v, server.calc_u(A, B)))
