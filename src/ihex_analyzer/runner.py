"""Analysis runner - reads a HEX file, runs all passes, and reports."""

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TextIO

from .analyzer import FileAnalysis, RecordInfo, analyze_file
from .record import RecordType

DEFAULT_INPUT = "hex_file.hex"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def default_input_path() -> Path:
    return Path(os.environ.get("IHEX_ANALYZER_FILE", DEFAULT_INPUT))


@dataclass
class AnalyzerConfig:
    """Configuration for one analysis run."""

    input_path: Path = field(default_factory=default_input_path)
    show_records: bool = True
    json_report: Path | None = None
    verbose: bool = False


class AnalysisRunner:
    """Runs the analysis passes over one file and prints the outcome."""

    def __init__(self, config: AnalyzerConfig | None = None, out: TextIO | None = None):
        self.config = config or AnalyzerConfig()
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    # ─────────────────────────────────────────────────────────────────────
    # Record display
    # ─────────────────────────────────────────────────────────────────────

    def print_record(self, info: RecordInfo) -> None:
        """Print the fields and resolved address of one record."""
        record = info.record
        resolution = info.resolution

        self._print("----------------")
        self._print(f"Line {info.line_number} of file: ")
        self._print(info.text.rstrip("\r\n"))
        self._print()
        self._print(
            f"*** INFORMATION OF RECORD {info.line_number}: "
            f"{resolution.label} RECORD ***"
        )
        self._print()

        if record.record_type != RecordType.END_OF_FILE:
            self._print(
                f"Record-length field: {record.byte_count:02X} "
                f"<=> {record.byte_count} bytes of data"
            )
            self._print(f"Address field: {record.address:04X}")
            self._print(f"HEX record type: {record.record_type:02X}")
            self._print(f"Data field: {record.data.hex().upper()}")
            self._print(f"Checksum field: {record.checksum:02X}")

        if resolution.is_extended:
            self._print(
                "-> Address from the data record's address field: "
                f"{resolution.base_address:04X}"
            )
            if resolution.absolute_address is not None:
                self._print(
                    f"-> Absolute memory address: {resolution.absolute_address:08X}"
                )

        self._print("----------------")
        self._print()

    # ─────────────────────────────────────────────────────────────────────
    # Reporting
    # ─────────────────────────────────────────────────────────────────────

    def print_summary(self, analysis: FileAnalysis) -> None:
        """Print the verdict of the validity and EOF scans."""
        validity = analysis.validity
        if self.config.verbose:
            self._print(f"Checked {validity.lines_checked} line(s)")
            if analysis.eof is not None:
                self._print(
                    f"End-Of-File records: {analysis.eof.eof_count}"
                    + (
                        f" (first at line {analysis.eof.first_eof_line})"
                        if analysis.eof.first_eof_line
                        else ""
                    )
                )

        error = analysis.error
        if error is not None:
            if error.line_number is None:
                self._print(f"File error: {error.message}")
            else:
                self._print(f"Error at line {error.line_number}: {error.message}")
            self._print()
            self._print("--> STOP CHECKING THE FILE BECAUSE FILE'S FORMAT IS NOT VALID . . . ")
            return

        self._print()
        self._print("--> INTEL-HEX FILE HAS CORRECT FORMAT, WITHOUT ANY ERRORS.")
        self._print()

    def write_report_json(self, analysis: FileAnalysis, path: Path) -> None:
        """Write the analysis outcome to JSON."""
        error = analysis.error
        data = {
            "file": str(self.config.input_path),
            "timestamp": datetime.now().isoformat(),
            "valid": analysis.ok,
            "lines_checked": analysis.validity.lines_checked,
            "error": None if error is None else {
                "kind": error.kind.name,
                "code": int(error.kind),
                "line": error.line_number,
                "message": error.message,
            },
            "records": [
                {
                    "line": info.line_number,
                    "type": info.resolution.label,
                    "byte_count": info.record.byte_count,
                    "address": info.record.address,
                    "data": info.record.data.hex().upper(),
                    "checksum": info.record.checksum,
                    "absolute_address": info.resolution.absolute_address,
                }
                for info in analysis.records
            ],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    # ─────────────────────────────────────────────────────────────────────
    # Main entry point
    # ─────────────────────────────────────────────────────────────────────

    def run(self) -> int:
        """Analyze the configured file; return the process exit code."""
        path = self.config.input_path
        if self.config.verbose:
            self._print(f"\n{'='*60}")
            self._print(f"Analyzing {path}")
            self._print(f"{'='*60}\n")

        try:
            analysis = analyze_file(path, describe=self.config.show_records)
        except (OSError, UnicodeDecodeError) as e:
            self._print("Error: Can not open file.")
            if self.config.verbose:
                self._print(f"  {e}")
            return EXIT_UNREADABLE

        self.print_summary(analysis)

        if analysis.ok and self.config.show_records:
            self._print("--> BELOW IS THE INFORMATION OF ALL FILE'S RECORDS . . .")
            self._print()
            for info in analysis.records:
                self.print_record(info)

        if self.config.json_report is not None:
            try:
                self.write_report_json(analysis, self.config.json_report)
            except OSError as e:
                self._print(f"Error: Can not write report to {self.config.json_report}: {e}")
                return EXIT_UNREADABLE
            self._print(f"Report written to: {self.config.json_report}")

        return EXIT_OK if analysis.ok else EXIT_INVALID


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check an Intel HEX file and list its records"
    )
    parser.add_argument(
        "input", type=Path, nargs="?", default=None,
        help=f"HEX file to analyze (default: $IHEX_ANALYZER_FILE or {DEFAULT_INPUT})"
    )
    parser.add_argument(
        "--no-records", action="store_true",
        help="Only check the file, don't list its records"
    )
    parser.add_argument(
        "--json", type=Path, default=None, metavar="FILE",
        help="Also write the result to a JSON file"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    config = AnalyzerConfig(
        input_path=args.input or default_input_path(),
        show_records=not args.no_records,
        json_report=args.json,
        verbose=args.verbose,
    )

    runner = AnalysisRunner(config)
    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
