"""
Conversion pipeline.

Wires the workbook reader, the tree builder, the validators and the
renderers together.  Every function here is one CLI command's worth of
work; the CLI in ``excel2espd.py`` only parses arguments and writes files.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from dto.diagnostics import CheckReport, StructureReport
from extractors.context import EngineContext
from extractors.labels import TagLabelChecker
from extractors.paths import PathValidator, ValidationMode
from extractors.structure import ChildStructure, outline_sheet
from extractors.tree import HierarchyTreeBuilder
from extractors.workbook import read_workbook
from render.document import build_request_document, build_response_document, write_document

logger = logging.getLogger(__name__)


def build_forest(
    file_paths: Iterable[str],
    sheet_name_filter: Optional[str] = None,
    context: Optional[EngineContext] = None,
) -> EngineContext:
    """Build the criterion forest of every workbook into one context."""
    context = context or EngineContext()

    for file_path in file_paths:
        sheets = read_workbook(file_path, sheet_name_filter)
        context.begin_workbook()

        for sheet in sheets:
            logger.info("Processing sheet: %s", sheet.name)
            try:
                keys = HierarchyTreeBuilder(context, sheet.name).build(sheet.rows)
                logger.info("  -> %d criterion subtree(s)", len(keys))
            except Exception:
                logger.exception("Failed to process sheet '%s' - skipping it", sheet.name)

    logger.info("Forest holds %d criterion subtree(s)", len(context.forest))
    if context.duplicate_keys:
        logger.warning("Rejected duplicate criterion keys: %s", ", ".join(context.duplicate_keys))
    return context


def generate_documents(
    file_paths: Iterable[str],
    request_output: str,
    response_output: str,
    sheet_name_filter: Optional[str] = None,
    issued_at: Optional[datetime.datetime] = None,
) -> EngineContext:
    context = build_forest(file_paths, sheet_name_filter)

    logger.info("Rendering ESPD Request...")
    write_document(build_request_document(context.forest, issued_at), request_output)

    logger.info("Rendering ESPD Response...")
    response, _ = build_response_document(context.forest, issued_at)
    write_document(response, response_output)

    return context


def check_paths(
    file_path: str,
    mode: Optional[ValidationMode] = None,
    sheet_name_filter: Optional[str] = None,
) -> CheckReport:
    mode = mode or ValidationMode.from_file_name(Path(file_path).name)
    report = CheckReport(file_name=Path(file_path).name, mode=mode.value)

    context = EngineContext()
    for sheet in read_workbook(file_path, sheet_name_filter):
        logger.info("Checking paths: %s (%s)", sheet.name, mode.value)
        report.path_checks.extend(PathValidator(context, sheet.name, mode).validate(sheet.rows))

    logger.info(
        "  -> %d path(s) checked, %d mismatch(es)",
        len(report.path_checks),
        report.failures,
    )
    return report


def check_labels(file_path: str, sheet_name_filter: Optional[str] = None) -> CheckReport:
    mode = ValidationMode.from_file_name(Path(file_path).name)
    report = CheckReport(file_name=Path(file_path).name, mode=mode.value)

    context = EngineContext()
    for sheet in read_workbook(file_path, sheet_name_filter):
        logger.info("Checking labels: %s", sheet.name)
        report.label_checks.extend(TagLabelChecker(context, sheet.name).check(sheet.rows))

    logger.info(
        "  -> %d label(s) checked, %d mismatch(es)",
        len(report.label_checks),
        report.failures,
    )
    return report


def describe_structure(
    file_paths: List[str],
    sheet_name_filter: Optional[str] = None,
) -> StructureReport:
    report = StructureReport(file_name=", ".join(Path(p).name for p in file_paths))
    children = ChildStructure()

    for file_path in file_paths:
        for sheet in read_workbook(file_path, sheet_name_filter):
            report.outline.extend(outline_sheet(sheet.name, sheet.rows))
            children.add_sheet(sheet.name, sheet.rows)

    report.children = children.children
    report.missing_cardinality = children.missing_cardinality
    return report
