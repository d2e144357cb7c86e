"""
excel2espd — CLI entry point.

Usage:
    python excel2espd.py generate <workbook.xlsx> [...] [--request-output ESPD_Request.xml]
                                                      [--response-output ESPD_Response.xml]
    python excel2espd.py check-paths <workbook.xlsx> [--mode request|response] [-o report.json]
    python excel2espd.py check-tags <workbook.xlsx> [-o report.json]
    python excel2espd.py outline <workbook.xlsx>
    python excel2espd.py structure <workbook.xlsx> [...]
    python excel2espd.py dump <workbook.xlsx> [-o rows.json]

Reads ESPD criterion workbooks (one questionnaire hierarchy per sheet,
nesting marked with ``{TAG`` / ``{TAG}`` / ``TAG}`` cells) and produces the
ESPD Request and Response XML documents, or diagnostic reports on the
workbook itself.

If --sheet is provided, only that worksheet is processed.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import dotenv

from dto.diagnostics import CheckReport
from extractors.paths import ValidationMode
from extractors.structure import format_children, format_outline
from extractors.workbook import WorkbookError, read_workbook
from pipeline import check_labels, check_paths, describe_structure, generate_documents

dotenv.load_dotenv()

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------


def _write_report(report: CheckReport, output: Optional[str]) -> None:
    if not output:
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(report.model_dump_json(indent=2, exclude_none=True))
    logger.info("Report written to %s", output)


def _cmd_generate(args: argparse.Namespace) -> int:
    generate_documents(
        args.excel_files,
        request_output=args.request_output,
        response_output=args.response_output,
        sheet_name_filter=args.sheet,
    )
    return 0


def _cmd_check_paths(args: argparse.Namespace) -> int:
    mode = ValidationMode(args.mode) if args.mode else None
    report = check_paths(args.excel_file, mode=mode, sheet_name_filter=args.sheet)
    _write_report(report, args.output)
    return 0


def _cmd_check_tags(args: argparse.Namespace) -> int:
    report = check_labels(args.excel_file, sheet_name_filter=args.sheet)
    _write_report(report, args.output)
    return 0


def _cmd_outline(args: argparse.Namespace) -> int:
    report = describe_structure([args.excel_file], sheet_name_filter=args.sheet)
    current_sheet = None
    for line in report.outline:
        if line.sheet != current_sheet:
            current_sheet = line.sheet
            print("_" * 80)
            print(current_sheet)
        print(format_outline([line]))
    return 0


def _cmd_structure(args: argparse.Namespace) -> int:
    report = describe_structure(args.excel_files, sheet_name_filter=args.sheet)
    print(format_children(report.children))
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    sheets = read_workbook(args.excel_file, args.sheet)
    payload = json.dumps([s.model_dump() for s in sheets], indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info("Rows written to %s", args.output)
    else:
        print(payload)
    return 0


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="excel2espd",
        description="Generate ESPD Request and Response XML files from Excel criterion workbooks.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every check, not only mismatches",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    def add_sheet_option(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-s",
            "--sheet",
            default=None,
            help="Name of a single worksheet to process (default: all sheets)",
        )

    p = commands.add_parser("generate", help="Generate ESPD Request and Response XML files")
    p.add_argument("excel_files", nargs="+", help="Criterion workbook(s) (.xlsx)")
    p.add_argument("--request-output", default="ESPD_Request.xml", help="Request XML path")
    p.add_argument("--response-output", default="ESPD_Response.xml", help="Response XML path")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_generate)

    p = commands.add_parser("check-paths", help="Check the XML like path IDs of each element")
    p.add_argument("excel_file", help="Criterion workbook (.xlsx)")
    p.add_argument(
        "--mode",
        choices=[m.value for m in ValidationMode],
        default=None,
        help="Workbook kind (default: 'request' if the file name contains '-request-')",
    )
    p.add_argument("-o", "--output", default=None, help="Write the checks as JSON")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_check_paths)

    p = commands.add_parser("check-tags", help="Check the label written before each tag")
    p.add_argument("excel_file", help="Criterion workbook (.xlsx)")
    p.add_argument("-o", "--output", default=None, help="Write the checks as JSON")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_check_tags)

    p = commands.add_parser("outline", help="Print the tag outline of each sheet")
    p.add_argument("excel_file", help="Criterion workbook (.xlsx)")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_outline)

    p = commands.add_parser("structure", help="Print the child tags found under each tag")
    p.add_argument("excel_files", nargs="+", help="Criterion workbook(s) (.xlsx)")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_structure)

    p = commands.add_parser("dump", help="Dump the sheet rows as JSON")
    p.add_argument("excel_file", help="Criterion workbook (.xlsx)")
    p.add_argument("-o", "--output", default=None, help="Output JSON path (default: stdout)")
    add_sheet_option(p)
    p.set_defaults(handler=_cmd_dump)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    try:
        return args.handler(args)
    except WorkbookError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
