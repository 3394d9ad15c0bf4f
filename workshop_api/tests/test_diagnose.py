import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from workshop_api import diagnose
from workshop_api.config import Settings
from workshop_api.store import InMemoryDocumentStore


class DiagnoseTests(unittest.TestCase):
    def test_missing_credentials_file_suggests_candidates(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            candidate = os.path.join(tmpdir, "service-account.json")
            open(candidate, "w").close()
            out = io.StringIO()
            with redirect_stdout(out):
                found = diagnose.check_credentials_file(
                    os.path.join(tmpdir, "missing.json"), search_dir=tmpdir
                )
        self.assertFalse(found)
        self.assertIn("FILE NOT FOUND", out.getvalue())
        self.assertIn("service-account.json", out.getvalue())

    def test_probe_collection(self):
        store = InMemoryDocumentStore()
        self.assertIsNone(diagnose.probe_collection(store, "sessions"))
        doc_id = store.add(store.collection("sessions"), {"title": "Intro"})
        self.assertEqual(diagnose.probe_collection(store, "sessions"), doc_id)

    def test_probe_collection_closes_listing(self):
        events = []

        class RecordingStore(InMemoryDocumentStore):
            def list_all(self, collection):
                try:
                    yield "first", {}
                    events.append("read past first")
                    yield "second", {}
                finally:
                    events.append("closed")

        first = diagnose.probe_collection(RecordingStore(), "sessions")
        self.assertEqual(first, "first")
        self.assertEqual(events, ["closed"])

    @patch("workshop_api.diagnose.build_document_store")
    def test_run_reports_success_and_failure(self, mock_build):
        store = InMemoryDocumentStore()
        mock_build.return_value = store
        settings = Settings(_env_file=None, firebase_service_account_path="ADC")

        with redirect_stdout(io.StringIO()):
            self.assertEqual(diagnose.run(settings, "sessions"), 0)

            store.fail_reads = "403 Missing or insufficient permissions."
            self.assertEqual(diagnose.run(settings, "sessions"), 1)

    def test_run_stops_on_missing_credentials_file(self):
        settings = Settings(
            _env_file=None, firebase_service_account_path="/missing/sa.json"
        )
        with patch("workshop_api.diagnose.build_document_store") as mock_build:
            with redirect_stdout(io.StringIO()):
                self.assertEqual(diagnose.run(settings, "sessions"), 1)
            mock_build.assert_not_called()


if __name__ == "__main__":
    unittest.main()
