import base64
import os
import tempfile
import unittest


class AppTestCase(unittest.TestCase):
    config_overrides = {}

    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from app import create_app
        from app.db import db

        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "test-secret",
            "LOG_LEVEL": "WARNING",
            **cls.config_overrides,
        })
        cls.db = db
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.session.remove()
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()

    def _signup(self, username, password="secret1", email=None, role=None):
        payload = {
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        }
        if role:
            payload["role"] = role
        response = self.client.post("/signup", json=payload)
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()

    def _auth_header(self, username, password="secret1", role=None):
        token = self._signup(username, password=password, role=role)["token"]
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _basic_header(username, password):
        encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
        return {"Authorization": f"Basic {encoded}"}

    def _create_post(self, headers, content="hello world", **extra):
        response = self.client.post(
            "/api/v2/posts",
            json={"content": content, **extra},
            headers=headers,
        )
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()
