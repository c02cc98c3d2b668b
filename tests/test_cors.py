import unittest

from fastapi.testclient import TestClient

from app.core.cors import normalize_origins
from app.main import app


class CorsTests(unittest.TestCase):
    def test_origins_are_trimmed_and_deduplicated(self):
        origins = normalize_origins([" http://localhost:5173/ ", "http://localhost:5173", "", "https://ranker.example"])
        self.assertEqual(origins, ["http://localhost:5173", "https://ranker.example"])

    def test_dev_origin_is_allowed(self):
        client = TestClient(app)
        response = client.get("/v1/health", headers={"Origin": "http://localhost:5173"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("access-control-allow-origin"), "http://localhost:5173")


if __name__ == "__main__":
    unittest.main()
