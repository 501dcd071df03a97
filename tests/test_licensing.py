"""
Unit tests for credentials and activation.
"""

import unittest

from doc_merger.core.config import Config
from doc_merger.core.errors import ConfigurationError, LicenseError
from doc_merger.core.licensing import MODE_LICENSE, MODE_METERED, Credentials, activate


class TestCredentials(unittest.TestCase):

    def test_flags_win_over_environment(self):
        environ = {Config.ENV_API_KEY: "env-key", Config.ENV_CUSTOMER_NAME: "Env Corp"}
        credentials = Credentials.from_sources(api_key=" flag-key ", environ=environ)
        self.assertEqual(credentials.api_key, "flag-key")
        self.assertEqual(credentials.customer_name, "Env Corp")

    def test_blank_flag_falls_back_to_environment(self):
        credentials = Credentials.from_sources(license_key="  ", environ={Config.ENV_LICENSE_KEY: "L-1"})
        self.assertEqual(credentials.license_key, "L-1")

    def test_repr_masks_secrets(self):
        text = repr(Credentials(license_key="SECRET-1234", api_key=""))
        self.assertNotIn("SECRET", text)
        self.assertIn("1234", text)
        self.assertIn("<unset>", text)


class TestActivate(unittest.TestCase):

    def test_api_key_selects_metered_mode(self):
        context = activate(Credentials(api_key="k", license_key="L"))
        self.assertEqual(context.mode, MODE_METERED)
        self.assertEqual(context.licensee, "metered")

    def test_license_key_with_name(self):
        context = activate(Credentials(license_key="L", customer_name="ACME"), render_engine="libreoffice")
        self.assertEqual(context.mode, MODE_LICENSE)
        self.assertEqual(context.licensee, "ACME")
        self.assertEqual(context.render_engine, "libreoffice")

    def test_license_key_without_name(self):
        with self.assertRaises(LicenseError) as ctx:
            activate(Credentials(license_key="L"))
        self.assertEqual(str(ctx.exception), "customer name required for license key")

    def test_no_credentials(self):
        with self.assertRaises(ConfigurationError) as ctx:
            activate(Credentials(customer_name="ACME"))
        self.assertEqual(str(ctx.exception), "neither api or license key provided")

    def test_unknown_engine(self):
        with self.assertRaises(ConfigurationError):
            activate(Credentials(api_key="k"), render_engine="pandoc")


if __name__ == '__main__':
    unittest.main()
