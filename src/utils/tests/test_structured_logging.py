"""Tests for structured JSON logging."""

import json
import logging
import sys
import unittest
from unittest.mock import patch

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **kwargs):
        record = logging.LogRecord(
            name="services.annotation_service", level=logging.INFO, pathname=__file__,
            lineno=1, msg="Named entities extracted", args=(), exc_info=kwargs.pop("exc_info", None),
        )
        for key, value in kwargs.items():
            setattr(record, key, value)
        return record

    def test_basic_fields_and_extras(self):
        output = json.loads(JSONFormatter().format(self._record(entity_count=2)))

        self.assertEqual(output["level"], "INFO")
        self.assertEqual(output["logger"], "services.annotation_service")
        self.assertEqual(output["message"], "Named entities extracted")
        self.assertEqual(output["entity_count"], 2)
        self.assertTrue(output["timestamp"].endswith("Z"))

    def test_exception_included(self):
        try:
            raise RuntimeError("engine down")
        except RuntimeError:
            record = self._record(exc_info=sys.exc_info())

        output = json.loads(JSONFormatter().format(record))
        self.assertIn("RuntimeError: engine down", output["exception"])

    def test_non_serializable_extra_is_stringified(self):
        output = json.loads(JSONFormatter().format(self._record(origins={"a"})))
        self.assertEqual(output["origins"], "{'a'}")


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level

    def tearDown(self):
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_level_from_env(self):
        with patch.dict("os.environ", {"LOG_LEVEL": "debug"}):
            setup_structured_logging()

        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertIsInstance(self.root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger("uvicorn.access").level, logging.WARNING)
        self.assertEqual(logging.getLogger("stanza").level, logging.WARNING)

    def test_explicit_level_wins(self):
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}):
            setup_structured_logging("warning")

        self.assertEqual(self.root.level, logging.WARNING)
