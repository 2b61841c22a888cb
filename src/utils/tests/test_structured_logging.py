"""Tests for the structured JSON log formatter."""

import json
import logging
import sys
import unittest

from utils.logging import JSONFormatter


class TestJSONFormatter(unittest.TestCase):

    def _record(self, msg, extra=None, exc_info=None):
        record = logging.LogRecord('services.auth_service', logging.INFO, __file__, 1, msg, None, exc_info)
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return record

    def test_formats_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record("User logged in")))

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "services.auth_service")
        self.assertEqual(data["message"], "User logged in")
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_includes_extra_fields(self):
        data = json.loads(JSONFormatter().format(self._record("User logged in", {"userId": 7})))

        self.assertEqual(data["userId"], 7)

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record("failed", exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        self.assertIn("RuntimeError: boom", data["exception"])


if __name__ == '__main__':
    unittest.main()
