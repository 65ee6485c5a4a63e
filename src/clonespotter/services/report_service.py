"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Caller-side persistence of scan results: output path construction,
directory creation and JSON serialization. The core never touches disk
for output; only this service does.
"""
import json
import os
from pathlib import Path
from typing import Dict, List, Union

from clonespotter.core.models import DuplicateGroups, ScanResult

JSON_EXTENSION = ".json"


class ReportService:
    @staticmethod
    def massage_path(output_dir: str, filename: str) -> str:
        """
        Builds the report path: trailing separators are dropped from the
        directory and ".json" is appended to the filename when missing.
        """
        if not output_dir:
            output_dir = "."
        elif output_dir not in ("/", "\\"):
            output_dir = output_dir.rstrip("/\\")
        if not filename.endswith(JSON_EXTENSION):
            filename += JSON_EXTENSION
        return os.path.join(output_dir, filename)

    @staticmethod
    def build_report(groups: DuplicateGroups) -> Dict[str, List[str]]:
        """original -> duplicates mapping, as written to the report file."""
        return {original: list(duplicates) for original, duplicates in groups.items()}

    @staticmethod
    def to_json(result: ScanResult) -> str:
        return json.dumps(ReportService.build_report(result.groups), indent=2, ensure_ascii=False)

    @staticmethod
    def write_json(data: Union[Dict, List], file_path: str) -> str:
        """
        Writes `data` as indented JSON, creating parent directories first.

        Raises:
            RuntimeError: If the directory cannot be created or the file written.
        """
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Failed to create directory {path.parent}: {e}") from e

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise RuntimeError(f"Failed to write file {path}: {e}") from e
        return str(path)

    @staticmethod
    def save_result(result: ScanResult, output_dir: str, filename: str) -> str:
        """Persists the grouped duplicates and returns the path written."""
        output_path = ReportService.massage_path(output_dir, filename)
        return ReportService.write_json(ReportService.build_report(result.groups), output_path)

    @staticmethod
    def reclaimable_bytes(groups: DuplicateGroups) -> int:
        """
        Bytes freed if every duplicate (not the originals) were removed.
        Files that vanished since the scan are ignored.
        """
        total_bytes = 0
        for duplicates in groups.values():
            for path in duplicates:
                try:
                    total_bytes += os.path.getsize(path)
                except OSError:
                    continue
        return total_bytes
