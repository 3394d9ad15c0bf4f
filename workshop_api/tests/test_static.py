import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from workshop_api.app import create_app
from workshop_api.config import Settings
from workshop_api.static import is_backend_path
from workshop_api.store import InMemoryDocumentStore


class StaticFrontendTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        with open(os.path.join(self.tmpdir.name, "index.html"), "w") as f:
            f.write("<html>workshop</html>")
        os.makedirs(os.path.join(self.tmpdir.name, "assets"))
        with open(os.path.join(self.tmpdir.name, "assets", "app.js"), "w") as f:
            f.write("console.log('app');")

        settings = Settings(
            _env_file=None,
            static_dir=self.tmpdir.name,
            admin_password="testpass",
        )
        app = create_app(settings, store=InMemoryDocumentStore())
        self.client = TestClient(app)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_existing_file_is_served(self):
        response = self.client.get("/assets/app.js")
        self.assertEqual(response.status_code, 200)
        self.assertIn("console.log", response.text)

    def test_client_routes_fall_back_to_index(self):
        for path in ("/", "/admin", "/admin/speakers/42"):
            response = self.client.get(path)
            self.assertEqual(response.status_code, 200, path)
            self.assertIn("workshop", response.text)

    def test_api_paths_are_not_rewritten(self):
        response = self.client.get("/api/does-not-exist")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.json())

        response = self.client.get("/api/speakers")
        self.assertEqual(response.json(), [])

    def test_wrong_method_on_api_path_is_405(self):
        response = self.client.put("/api/attendees", json={"name": "x"})
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method Not Allowed"})
        allowed = {m.strip() for m in response.headers["allow"].split(",")}
        self.assertIn("GET", allowed)
        self.assertIn("POST", allowed)

        response = self.client.delete("/api/speakers")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(self.client.post("/health").status_code, 405)

    def test_unknown_api_path_with_other_method_is_404(self):
        response = self.client.post("/api/does-not-exist", json={})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.client.delete("/api/attendees/abc").status_code, 404)

    def test_matching_method_still_reaches_route(self):
        response = self.client.delete("/api/sessions/nonexistent-id")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Session deleted"})

    def test_health_still_answers(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


class BackendPathTests(unittest.TestCase):
    def test_backend_paths(self):
        self.assertTrue(is_backend_path("/api"))
        self.assertTrue(is_backend_path("/api/attendees"))
        self.assertTrue(is_backend_path("/health"))
        self.assertFalse(is_backend_path("/health/extra"))
        self.assertFalse(is_backend_path("/"))
        self.assertFalse(is_backend_path("/admin"))


if __name__ == "__main__":
    unittest.main()
