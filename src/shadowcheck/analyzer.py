"""Main analysis orchestrator for shadow detection."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from shadowcheck.declaration_scanner import scan_declarations
from shadowcheck.dump_loader import load_package_dump
from shadowcheck.errors import DumpFormatError
from shadowcheck.models import AnalysisResult, Package, ShadowConfig
from shadowcheck.reporter import DiagnosticReporter
from shadowcheck.shadow_detector import ShadowDetector
from shadowcheck.usage_index import build_usage_index

logger = logging.getLogger(__name__)


def analyze_package(package: Package, config: ShadowConfig | None = None) -> AnalysisResult:
    """Complete shadow analysis for one resolved package.

    Args:
        package: Syntax trees plus resolution results for the package
        config: Analysis settings; defaults to lenient mode

    Returns:
        AnalysisResult with diagnostics in the order their declarations were scanned
    """
    config = config or ShadowConfig()
    if config.strict:
        logger.debug("Strict mode requested for %s; using the standard liveness heuristics", package.path)

    # 1. Index every use of every symbol; read-only from here on
    usages = build_usage_index(package.info.uses)

    # 2. Collect declaration candidates, mutations and loop binders in one pass
    scan = scan_declarations(package.files, package.info)

    # 3. Decide each candidate against the frozen index
    reporter = DiagnosticReporter(package.fset)
    detector = ShadowDetector(package, scan, usages, reporter, config)
    for declaration in scan.declarations:
        detector.check_declaration(declaration)

    diagnostics = reporter.diagnostics
    logger.debug("%s: %d diagnostic(s)", package.path, len(diagnostics))
    return AnalysisResult(package_path=package.path, fset=package.fset, diagnostics=diagnostics)


def analyze_dump_file(dump_path: Path, config: ShadowConfig | None = None) -> AnalysisResult | None:
    """Load a resolved package dump and analyze it.

    Returns:
        AnalysisResult on success, None if the dump could not be read or decoded
    """
    try:
        package = load_package_dump(dump_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, DumpFormatError) as e:
        logger.warning("Skipping %s: %s", dump_path, e)
        return None
    return analyze_package(package, config)


def analyze_dump_files(
    dump_paths: Iterable[Path], config: ShadowConfig | None = None
) -> tuple[tuple[AnalysisResult, ...], tuple[Path, ...]]:
    """Analyze several dumps independently; a bad dump never stops the others.

    Returns:
        (results for the dumps that loaded, paths of the dumps that failed)
    """
    results: list[AnalysisResult] = []
    failures: list[Path] = []
    for dump_path in dump_paths:
        result = analyze_dump_file(dump_path, config)
        if result is None:
            failures.append(dump_path)
        else:
            results.append(result)
    return tuple(results), tuple(failures)
