from unittest import TestCase

from pyesrp.config import (
    DEFAULT_OPTIONS,
    CryptoOptions,
    DigestAlgorithm,
)
from pyesrp.exceptions import ConfigurationError


class TestConfig(TestCase):
    def test_default_options(self):
        self.assertEqual(DEFAULT_OPTIONS.digest, DigestAlgorithm.sha256)
        self.assertFalse(DEFAULT_OPTIONS.legacy_kdf)
        self.assertFalse(DEFAULT_OPTIONS.legacy_mac)
        self.assertEqual(DEFAULT_OPTIONS.kdf_iterations, 20000)

    def test_from_dict(self):
        options = CryptoOptions.from_dict({'digest': 'sha512', 'legacy_kdf': True})
        self.assertEqual(options, CryptoOptions(DigestAlgorithm.sha512, True, False, 20000))

        self.assertEqual(CryptoOptions.from_dict({}), DEFAULT_OPTIONS)

    def test_from_dict_invalid(self):
        with self.assertRaises(ConfigurationError):
            CryptoOptions.from_dict({'digest': 'md5'})

        for iterations in (0, -1, '20000', True):
            with self.assertRaises(ConfigurationError):
                CryptoOptions.from_dict({'kdf_iterations': iterations})

        for name in ('legacy_kdf', 'legacy_mac'):
            for flag in ('false', 'no', 'true', 0, 1, None):
                with self.subTest(name=name, flag=flag):
                    with self.assertRaises(ConfigurationError):
                        CryptoOptions.from_dict({name: flag})

        self.assertEqual(CryptoOptions.from_dict({'legacy_kdf': False, 'legacy_mac': True}),
                         CryptoOptions(DigestAlgorithm.sha256, False, True, 20000))

    def test_from_dict_invalid_logged(self):
        with self.assertLogs('pyesrp', level='ERROR') as logs:
            with self.assertRaises(ConfigurationError):
                CryptoOptions.from_dict({'legacy_kdf': 'false'})
        self.assertIn('legacy_kdf must be a boolean', logs.output[0])

        with self.assertLogs('pyesrp', level='ERROR'):
            with self.assertRaises(ConfigurationError):
                CryptoOptions.from_dict({'digest': 'md5'})

        with self.assertLogs('pyesrp', level='ERROR'):
            with self.assertRaises(ConfigurationError):
                CryptoOptions.from_dict({'kdf_iterations': 0})

    def test_to_dict(self):
        options = CryptoOptions(DigestAlgorithm.sha1, legacy_kdf=True, legacy_mac=True, kdf_iterations=1000)
        self.assertEqual(options.to_dict(), {
            'digest': 'sha1',
            'legacy_kdf': True,
            'legacy_mac': True,
            'kdf_iterations': 1000,
        })
        self.assertEqual(CryptoOptions.from_dict(options.to_dict()), options)
