import logging

from pyesrp.config import CryptoOptions, DigestAlgorithm
from pyesrp.crypto import CryptoBackend, create_crypto
from pyesrp.engine import Engine
from pyesrp.group import GROUP_2048
from pyesrp.variant import StandardVariant

USERNAME = 'alice'
PASSWORD = 'verysecure'


def main():
    logging.basicConfig(level=logging.DEBUG)

    # client and server may use different backends, the results are identical
    options = CryptoOptions(DigestAlgorithm.sha512)
    client = StandardVariant(Engine(create_crypto(options, CryptoBackend.standard), GROUP_2048))
    server = StandardVariant(Engine(create_crypto(options, CryptoBackend.openssl), GROUP_2048))

    # registration, server stores salt and verifier
    salt = client.engine.crypto.random(16)
    v = client.engine.calc_v(client.calc_x(PASSWORD, salt, USERNAME))

    # client -> server: username, A
    a = client.engine.crypto.random(32)
    A = client.engine.calc_a(a)
    if server.engine.is_zero_mod_n(A):
        raise SystemExit('Server: A % N == 0, abort')

    # server -> client: salt, B
    b = server.engine.crypto.random(32)
    B = server.engine.calc_b(b, v)
    if client.engine.is_zero_mod_n(B):
        raise SystemExit('Client: B % N == 0, abort')

    # client -> server: M
    u = client.engine.calc_u(A, B)
    client_s = client.engine.calc_client_s(B, a, client.calc_x(PASSWORD, salt, USERNAME), u)
    client_k = client.engine.calc_k(client_s)
    client_m = client.calc_m(client_k, A, B, client_s, salt, USERNAME)

    # server -> client: M2
    u = server.engine.calc_u(A, B)
    server_s = server.engine.calc_server_s(A, b, v, u)
    server_k = server.engine.calc_k(server_s)
    if not server.verify_m(server.calc_m(server_k, A, B, server_s, salt, USERNAME), client_m):
        raise SystemExit('Server: client proof is invalid')
    server_m2 = server.calc_m2(server_k, A, client_m, server_s)

    if not client.verify_m(client.calc_m2(client_k, A, client_m, client_s), server_m2):
        raise SystemExit('Client: server proof is invalid')

    print(f'Authenticated, session key: {client_k.to_hex()}')


if __name__ == '__main__':
    main()
