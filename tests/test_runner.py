"""Tests for the console runner."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from ihex_analyzer.runner import (
    EXIT_INVALID,
    EXIT_OK,
    EXIT_UNREADABLE,
    AnalysisRunner,
    AnalyzerConfig,
    main,
)

VALID_FILE = (
    ":0300300002337A1E\n"
    ":020000040001F9\n"
    ":020000022000DC\n"
    ":04000005000000CD2A\n"
    ":00000001FF\n"
)


class RunnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write(self, text: str, name: str = "image.hex") -> Path:
        path = self.tmpdir / name
        path.write_text(text)
        return path

    def run_runner(self, **kwargs) -> tuple[int, str]:
        out = io.StringIO()
        runner = AnalysisRunner(AnalyzerConfig(**kwargs), out=out)
        return runner.run(), out.getvalue()

    def test_valid_file_lists_records(self) -> None:
        code, output = self.run_runner(input_path=self.write(VALID_FILE))
        self.assertEqual(code, EXIT_OK)
        self.assertIn("INTEL-HEX FILE HAS CORRECT FORMAT, WITHOUT ANY ERRORS.", output)
        self.assertIn("*** INFORMATION OF RECORD 1: DATA RECORD ***", output)
        self.assertIn("Record-length field: 03 <=> 3 bytes of data", output)
        self.assertIn("Data field: 02337A", output)
        self.assertIn("*** INFORMATION OF RECORD 2: EXTENDED LINEAR ADDRESS RECORD ***", output)
        self.assertIn("-> Address from the data record's address field: 0030", output)
        self.assertIn("-> Absolute memory address: 00010030", output)
        self.assertIn("*** INFORMATION OF RECORD 3: EXTENDED SEGMENT ADDRESS RECORD ***", output)
        self.assertIn("-> Absolute memory address: 00020030", output)
        self.assertIn("*** INFORMATION OF RECORD 4: START LINEAR ADDRESS RECORD ***", output)
        self.assertIn("Data field: 000000CD", output)
        self.assertIn("*** INFORMATION OF RECORD 5: END-OF-FILE RECORD ***", output)
        self.assertEqual(output.count("-> Absolute memory address:"), 2)

    def test_raw_line_followed_by_blank_line(self) -> None:
        _, output = self.run_runner(input_path=self.write(VALID_FILE))
        self.assertIn(
            "Line 1 of file: \n:0300300002337A1E\n\n*** INFORMATION OF RECORD 1",
            output,
        )

    def test_extended_record_without_offset_bytes(self) -> None:
        path = self.write(":0300300002337A1E\n:00000004FC\n:00000001FF\n")
        code, output = self.run_runner(input_path=path)
        self.assertEqual(code, EXIT_OK)
        self.assertIn("*** INFORMATION OF RECORD 2: EXTENDED LINEAR ADDRESS RECORD ***", output)
        self.assertIn("-> Address from the data record's address field: 0030", output)
        self.assertNotIn("-> Absolute memory address:", output)

    def test_no_records(self) -> None:
        code, output = self.run_runner(
            input_path=self.write(VALID_FILE), show_records=False
        )
        self.assertEqual(code, EXIT_OK)
        self.assertNotIn("INFORMATION OF RECORD", output)

    def test_invalid_record(self) -> None:
        path = self.write(":0300300002337A1F\n:00000001FF\n")
        code, output = self.run_runner(input_path=path)
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn(
            "Error at line 1: Checksum field doesn't match the actual calculation.",
            output,
        )
        self.assertIn("STOP CHECKING THE FILE", output)
        self.assertNotIn("INFORMATION OF RECORD", output)

    def test_missing_eof(self) -> None:
        code, output = self.run_runner(input_path=self.write(":0300300002337A1E\n"))
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn("File error: File is missing End-Of-File record!!!", output)

    def test_duplicate_eof(self) -> None:
        path = self.write(":00000001FF\n:0300300002337A1E\n:00000001FF\n")
        code, output = self.run_runner(input_path=path)
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn(
            "Error at line 1: File mustn't have more than one End-Of-File record!!!",
            output,
        )

    def test_unreadable_file(self) -> None:
        code, output = self.run_runner(input_path=self.tmpdir / "absent.hex")
        self.assertEqual(code, EXIT_UNREADABLE)
        self.assertIn("Error: Can not open file.", output)

    def test_json_report(self) -> None:
        report = self.tmpdir / "report.json"
        code, _ = self.run_runner(input_path=self.write(VALID_FILE), json_report=report)
        self.assertEqual(code, EXIT_OK)
        data = json.loads(report.read_text())
        self.assertTrue(data["valid"])
        self.assertIsNone(data["error"])
        self.assertEqual(len(data["records"]), 5)
        self.assertEqual(data["records"][1]["absolute_address"], 0x00010030)

    def test_json_report_short_extended_record(self) -> None:
        report = self.tmpdir / "report.json"
        path = self.write(":0300300002337A1E\n:00000004FC\n:00000001FF\n")
        code, _ = self.run_runner(input_path=path, json_report=report)
        self.assertEqual(code, EXIT_OK)
        data = json.loads(report.read_text())
        self.assertIsNone(data["records"][1]["absolute_address"])

    def test_json_report_unwritable(self) -> None:
        report = self.tmpdir / "no_such_dir" / "report.json"
        code, output = self.run_runner(
            input_path=self.write(VALID_FILE), show_records=False, json_report=report
        )
        self.assertEqual(code, EXIT_UNREADABLE)
        self.assertIn("CORRECT FORMAT", output)
        self.assertIn(f"Error: Can not write report to {report}", output)
        self.assertNotIn("Report written to", output)

    def test_json_report_error(self) -> None:
        report = self.tmpdir / "report.json"
        path = self.write(":0300300002337A1E\n:00000001FF\n\n")
        code, _ = self.run_runner(input_path=path, json_report=report)
        self.assertEqual(code, EXIT_INVALID)
        data = json.loads(report.read_text())
        self.assertEqual(data["error"]["kind"], "MISSING_START_CODE")
        self.assertEqual(data["error"]["line"], 3)
        self.assertEqual(data["records"], [])

    def test_verbose(self) -> None:
        code, output = self.run_runner(input_path=self.write(VALID_FILE), verbose=True)
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Checked 5 line(s)", output)
        self.assertIn("End-Of-File records: 1 (first at line 5)", output)


class MainTests(unittest.TestCase):
    def test_main_with_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "image.hex"
            path.write_text(VALID_FILE)
            out = io.StringIO()
            with redirect_stdout(out):
                code = main([str(path), "--no-records"])
        self.assertEqual(code, EXIT_OK)
        self.assertIn("CORRECT FORMAT", out.getvalue())

    def test_main_uses_environment_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "from_env.hex"
            path.write_text(":0300300002337A1E\n")
            out = io.StringIO()
            with mock.patch.dict(os.environ, {"IHEX_ANALYZER_FILE": str(path)}):
                with redirect_stdout(out):
                    code = main([])
        self.assertEqual(code, EXIT_INVALID)
        self.assertIn("missing End-Of-File", out.getvalue())


if __name__ == "__main__":
    unittest.main()
