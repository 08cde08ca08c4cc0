from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from urlshortener.environment import ENVIRONMENT_VARIABLE, get_environment, is_development, is_production, \
    is_staging


class GetEnvironmentTestCase(SimpleTestCase):
    def test_default_is_production(self):
        """Test that a missing variable selects Production."""
        self.assertEqual(get_environment({}), 'Production')

    def test_blank_is_production(self):
        self.assertEqual(get_environment({ENVIRONMENT_VARIABLE: '  '}), 'Production')

    def test_known_names(self):
        for name in ('Development', 'Staging', 'Production'):
            with self.subTest(name=name):
                self.assertEqual(get_environment({ENVIRONMENT_VARIABLE: name}), name)

    def test_case_insensitive(self):
        """Test that names are matched case-insensitively and returned in canonical form."""
        self.assertEqual(get_environment({ENVIRONMENT_VARIABLE: 'development'}), 'Development')
        self.assertEqual(get_environment({ENVIRONMENT_VARIABLE: ' STAGING '}), 'Staging')

    def test_unknown_name(self):
        with self.assertRaises(ImproperlyConfigured):
            get_environment({ENVIRONMENT_VARIABLE: 'Testing'})


class EnvironmentPredicatesTestCase(SimpleTestCase):
    def test_explicit_name(self):
        self.assertTrue(is_development('Development'))
        self.assertFalse(is_development('Production'))
        self.assertTrue(is_staging('Staging'))
        self.assertTrue(is_production('Production'))

    @override_settings(ENVIRONMENT='Development')
    def test_reads_settings(self):
        self.assertTrue(is_development())
        self.assertFalse(is_production())

    @override_settings(ENVIRONMENT='Staging')
    def test_staging_is_not_development(self):
        self.assertFalse(is_development())
        self.assertTrue(is_staging())
