import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from promocard_core.logging_setup import configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("promocard")
        self._saved = list(self.logger.handlers)
        self.logger.handlers.clear()

    def tearDown(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers[:] = self._saved

    def test_json_lines_with_event(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(level="debug", console=False, directory=Path(tmp))
            get_logger("renderer").debug("rendered", extra={"event": "render_complete", "variant": "highlight", "bytes": 512})
            for handler in logger.handlers:
                handler.flush()

            lines = (Path(tmp) / "promocard.log").read_text(encoding="utf-8").splitlines()
            records = [json.loads(line) for line in lines]
            self.assertEqual(records[0]["event"], "logging_configured")
            self.assertEqual(records[-1]["logger"], "promocard.renderer")
            self.assertEqual(records[-1]["level"], "DEBUG")
            self.assertEqual(records[-1]["event"], "render_complete")
            self.assertEqual((records[-1]["variant"], records[-1]["bytes"]), ("highlight", 512))
            self.assertEqual(records[-1]["msg"], "rendered")
            self.assertNotIn("args", records[-1])
            self.assertTrue(records[0]["log_path"].endswith("promocard.log"))

            for handler in logger.handlers:
                handler.close()

    def test_unknown_level_falls_back_to_info(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(level="chatty", console=False, directory=Path(tmp))
            self.assertEqual(logger.level, logging.INFO)
            for handler in logger.handlers:
                handler.close()

    def test_configure_is_idempotent(self):
        with tempfile.TemporaryDirectory() as tmp:
            first = configure_logging(console=True, directory=Path(tmp))
            count = len(first.handlers)
            second = configure_logging(console=True, directory=Path(tmp))
            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), count)
            self.assertEqual(count, 2)
            for handler in second.handlers:
                handler.close()


if __name__ == "__main__":
    unittest.main()
