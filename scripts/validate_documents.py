#!/usr/bin/env python3
"""Validate a directory of language documents.

Flattens every ``lang_<id>.yaml`` document and reports:
- Parse failures (malformed YAML, oversize documents, excessive nesting)
- Flattening warnings (dotted keys, duplicate paths, non-scalar keys)
- Coverage gaps: paths of the default language missing from another language

Usage:
    python scripts/validate_documents.py assets/localisation
    python scripts/validate_documents.py assets/localisation --default de --strict

Exit Codes:
    0: All documents parsed (warnings allowed unless --strict)
    1: One or more documents failed to parse (or warnings with --strict)
    2: Configuration error (missing directory)

Python 3.13+. Depends on: localkeys.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path

from localkeys import ConfigurationError, DocumentParseError, LanguageId
from localkeys.diagnostics import Diagnostic
from localkeys.localization import DirectoryDocumentSource
from localkeys.syntax import flatten_document


@dataclass(slots=True)
class DocumentReport:
    """Validation outcome for one language document."""

    language: LanguageId
    source_path: str
    paths: frozenset[str] = frozenset()
    diagnostics: tuple[Diagnostic, ...] = ()
    error: DocumentParseError | None = None
    missing: list[str] = field(default_factory=list)


def validate_directory(
    directory: str | Path, *, default_language: str = "en"
) -> list[DocumentReport]:
    """Flatten every document in a directory and compare it to the default.

    Raises:
        ConfigurationError: If the directory does not exist
    """
    source = DirectoryDocumentSource(directory)
    reports: list[DocumentReport] = []
    for language, path in source.discover().items():
        report = DocumentReport(language=language, source_path=str(path))
        try:
            result = flatten_document(
                path.read_text(encoding="utf-8"), source_path=str(path)
            )
        except DocumentParseError as e:
            report.error = e
        else:
            report.paths = frozenset(result.table)
            report.diagnostics = result.diagnostics
        reports.append(report)

    default = LanguageId(default_language)
    reference = next((r for r in reports if r.language == default and r.error is None), None)
    if reference is not None:
        for report in reports:
            if report is reference or report.error is not None:
                continue
            report.missing = sorted(reference.paths - report.paths)
    return reports


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("directory", type=Path, help="directory holding lang_<id>.yaml files")
    parser.add_argument("--default", default="en", help="reference language (default: en)")
    parser.add_argument("--strict", action="store_true", help="treat warnings as failures")
    args = parser.parse_args(argv)

    try:
        reports = validate_directory(args.directory, default_language=args.default)
    except ConfigurationError as e:
        print(f"[ERROR] {e}")
        return 2

    if not reports:
        print(f"[WARN] No language documents found in {args.directory}")
        return 0

    failures = 0
    warnings = 0
    for report in reports:
        if report.error is not None:
            failures += 1
            print(f"[FAIL] {report.language}: {report.source_path}")
            print(f"  {report.error}")
            continue

        status = "OK" if not (report.diagnostics or report.missing) else "WARN"
        print(f"[{status}] {report.language}: {len(report.paths)} paths")
        for diagnostic in report.diagnostics:
            warnings += 1
            print("  " + diagnostic.format_error().replace("\n", "\n  "))
        if report.missing:
            warnings += 1
            print(f"  missing {len(report.missing)} path(s) from '{args.default}':")
            for path in report.missing:
                print(f"    {path}")

    print(f"\nSummary: {len(reports)} document(s), {failures} failed, {warnings} warning(s)")
    if failures or (args.strict and warnings):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
