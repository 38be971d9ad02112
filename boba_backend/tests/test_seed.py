import unittest

from boba_backend.db import InMemoryDbClient, PostgresDbClient
from boba_backend.seed import load_fixture


class LoadFixtureTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()

    def test_load_fixture(self):
        counts = load_fixture(
            self.db,
            {
                "realms": {"v0": {"root": [{"name": "cursor", "type": "URL", "value": "x"}]}},
                "boards": [
                    {
                        "id": "b1",
                        "realm_id": "realm",
                        "slug": "gore",
                        "last_activity_from_others_at": 10.0,
                    }
                ],
                "users": {
                    "abc": {
                        "settings": [{"name": "FESTIVE", "type": "BOOLEAN", "value": True}],
                        "boards": {"b1": {"last_visit_at": 20.0, "pinned_order": 1}},
                    }
                },
            },
        )
        self.assertEqual(counts, {"realms": 1, "boards": 1, "users": 1})
        self.assertIn("root", self.db.get_realm_settings("v0"))
        board = self.db.get_boards("abc")[0]
        self.assertEqual(board.pinned_order, 1)
        self.assertFalse(board.has_updates)
        self.assertEqual(self.db.get_user_settings("abc")[0]["name"], "FESTIVE")

    def test_rejects_per_user_fields_on_boards(self):
        with self.assertRaises(ValueError):
            load_fixture(
                self.db,
                {"boards": [{"id": "b1", "realm_id": "r", "slug": "gore", "muted": True}]},
            )

    def test_invalid_board_value_writes_nothing(self):
        with self.assertRaises(ValueError):
            load_fixture(
                self.db,
                {
                    "realms": {"v0": {"root": []}},
                    "boards": [
                        {"id": "b1", "realm_id": "r", "slug": "gore"},
                        {"id": "b2", "realm_id": "r", "slug": "anime", "tagline": None},
                    ],
                },
            )
        self.assertIsNone(self.db.get_realm_settings("v0"))
        self.assertEqual(self.db.get_boards(), [])

    def test_invalid_board_value_on_sql_client(self):
        db = PostgresDbClient("sqlite+pysqlite:///:memory:")
        with self.assertRaises(ValueError):
            load_fixture(
                db,
                {
                    "boards": [
                        {"id": "b1", "realm_id": "r", "slug": "gore"},
                        {"id": "b2", "realm_id": "r", "slug": None},
                    ]
                },
            )
        self.assertEqual(db.get_boards(), [])

    def test_rejects_unknown_user_board_fields(self):
        with self.assertRaises(ValueError):
            load_fixture(
                self.db,
                {"users": {"abc": {"boards": {"b1": {"has_updates": True}}}}},
            )
        self.assertEqual(self.db.board_user_state, {})


if __name__ == "__main__":
    unittest.main()
