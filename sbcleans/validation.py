"""
sbcleans.validation - Destination and environment checks.

Validates the export destination and input files before the pipeline
touches the project.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from sbcleans.exceptions import ValidationError


def check_destination(destination: Path) -> Path:
    """Check that the chosen destination file sits in an existing directory.

    Args:
        destination: File path picked for the export

    Returns:
        The export root (the destination's directory)

    Raises:
        ValidationError: If the directory doesn't exist or isn't a directory
    """
    export_path = destination.parent
    if not export_path.exists():
        raise ValidationError(f"Export directory not found: {export_path}")
    if not export_path.is_dir():
        raise ValidationError(f"Not a directory: {export_path}")
    return export_path


def check_disk_space(path: Path, required_mb: int) -> dict[str, Any]:
    """Check if there's enough disk space at the given path.

    Args:
        path: Path to check (will use parent directory if file)
        required_mb: Required space in megabytes

    Returns:
        Dict with 'available_mb', 'required_mb', 'sufficient'

    Raises:
        ValidationError: If space cannot be determined
    """
    check_path = path.parent if path.is_file() else path

    if not check_path.exists():
        check_path = check_path.parent

    try:
        stat = shutil.disk_usage(check_path)
        available_mb = stat.free // (1024 * 1024)

        return {
            "available_mb": available_mb,
            "required_mb": required_mb,
            "sufficient": available_mb >= required_mb,
        }
    except OSError as e:
        raise ValidationError(f"Cannot check disk space: {e}") from e


def validate_document_file(path: Path) -> dict[str, Any]:
    """Validate a storyboard document file exists.

    Raises:
        ValidationError: If file doesn't exist or is not a file
    """
    if not path.exists():
        raise ValidationError(f"File not found: {path}")

    if not path.is_file():
        raise ValidationError(f"Not a file: {path}")

    return {
        "path": str(path),
        "exists": True,
        "size_kb": path.stat().st_size // 1024,
    }


def run_preflight_checks(
    destination: Path,
    document: Path | None = None,
    required_mb: int = 500,
) -> dict[str, Any]:
    """Run all checks before starting an export.

    Args:
        destination: Chosen export file path
        document: Optional storyboard document to validate
        required_mb: Free space expected at the destination

    Returns:
        Dict with 'passed' and per-check results
    """
    results: dict[str, Any] = {
        "passed": True,
        "checks": {},
    }

    try:
        results["checks"]["destination"] = {"export_path": str(check_destination(destination))}
    except ValidationError as e:
        results["checks"]["destination"] = {"error": str(e)}
        results["passed"] = False

    try:
        disk = check_disk_space(destination.parent, required_mb)
        results["checks"]["disk_space"] = disk
        if not disk["sufficient"]:
            results["passed"] = False
    except ValidationError as e:
        results["checks"]["disk_space"] = {"error": str(e)}
        results["passed"] = False

    if document is not None:
        try:
            results["checks"]["document"] = validate_document_file(document)
        except ValidationError as e:
            results["checks"]["document"] = {"error": str(e)}
            results["passed"] = False

    return results
