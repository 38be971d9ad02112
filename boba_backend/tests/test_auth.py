import unittest
from unittest.mock import MagicMock, patch

from firebase_admin import auth as firebase_auth

from boba_backend import dependencies
from boba_backend.auth import (
    FirebaseTokenVerifier,
    InMemoryTokenVerifier,
    InvalidTokenError,
)
from boba_backend.config import Settings
from boba_backend.db import InMemoryDbClient, PostgresDbClient


class TokenVerifierTests(unittest.TestCase):
    def test_in_memory_verifier(self):
        verifier = InMemoryTokenVerifier({"t1": "uid-1"})
        verifier.add_token("t2", "uid-2")
        self.assertEqual(verifier.verify("t1"), "uid-1")
        self.assertEqual(verifier.verify("t2"), "uid-2")
        with self.assertRaises(InvalidTokenError):
            verifier.verify("nope")

    @patch("boba_backend.auth.firebase_auth.verify_id_token")
    @patch("boba_backend.auth.firebase_admin.initialize_app")
    @patch("boba_backend.auth.firebase_admin.get_app")
    def test_firebase_verifier(self, mock_get_app, mock_init, mock_verify):
        mock_get_app.side_effect = ValueError("no app")
        fake_app = MagicMock()
        mock_init.return_value = fake_app
        mock_verify.return_value = {"uid": "firebase-uid"}

        verifier = FirebaseTokenVerifier(project_id="boba-dev")
        mock_init.assert_called_once_with(
            None, {"projectId": "boba-dev"}, name="boba-realms"
        )
        self.assertEqual(verifier.verify("id-token"), "firebase-uid")
        mock_verify.assert_called_once_with("id-token", app=fake_app)

        mock_verify.side_effect = ValueError("malformed")
        with self.assertRaises(InvalidTokenError):
            verifier.verify("garbage")

    @patch("boba_backend.auth.firebase_auth.verify_id_token")
    @patch("boba_backend.auth.firebase_admin.get_app")
    def test_firebase_verifier_log_levels(self, mock_get_app, mock_verify):
        mock_get_app.return_value = MagicMock()
        verifier = FirebaseTokenVerifier()

        mock_verify.side_effect = firebase_auth.InvalidIdTokenError("bad signature")
        with self.assertLogs("boba_backend.auth", level="INFO") as logs:
            with self.assertRaises(InvalidTokenError):
                verifier.verify("forged")
        self.assertEqual([record.levelname for record in logs.records], ["INFO"])

        mock_verify.side_effect = ValueError("A project ID is required")
        with self.assertLogs("boba_backend.auth", level="WARNING") as logs:
            with self.assertRaises(InvalidTokenError):
                verifier.verify("id-token")
        self.assertIn("project ID", logs.output[0])


class SettingsTests(unittest.TestCase):
    def test_parsed_dev_tokens(self):
        settings = Settings(dev_auth_tokens="a:uid-a, b:uid-b,broken,:x")
        self.assertEqual(settings.parsed_dev_tokens(), {"a": "uid-a", "b": "uid-b"})


class DependencyWiringTests(unittest.TestCase):
    def setUp(self):
        dependencies._db_client = None
        dependencies._token_verifier = None

    def tearDown(self):
        dependencies._db_client = None
        dependencies._token_verifier = None

    @patch("boba_backend.dependencies.get_settings")
    def test_in_memory_backends(self, mock_settings):
        mock_settings.return_value = Settings(
            use_in_memory_backends=True, dev_auth_tokens="dev:uid-dev"
        )
        db = dependencies.get_db_client()
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertIs(dependencies.get_db_client(), db)

        verifier = dependencies.get_token_verifier()
        self.assertIsInstance(verifier, InMemoryTokenVerifier)
        self.assertEqual(verifier.verify("dev"), "uid-dev")

    @patch("boba_backend.auth.firebase_admin.initialize_app")
    @patch("boba_backend.auth.firebase_admin.get_app")
    @patch("boba_backend.dependencies.get_settings")
    def test_configured_backends(self, mock_settings, mock_get_app, mock_init):
        mock_settings.return_value = Settings(
            use_in_memory_backends=False,
            database_url="sqlite+pysqlite:///:memory:",
            firebase_project_id="boba-dev",
        )
        mock_get_app.side_effect = ValueError("no app")

        self.assertIsInstance(dependencies.get_db_client(), PostgresDbClient)
        verifier = dependencies.get_token_verifier()
        self.assertIsInstance(verifier, FirebaseTokenVerifier)
        self.assertIs(dependencies.get_token_verifier(), verifier)
        mock_init.assert_called_once_with(
            None, {"projectId": "boba-dev"}, name="boba-realms"
        )


if __name__ == "__main__":
    unittest.main()
