from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..errors import ShipsheetError
from ..excel.reader import read_columns
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.error_record import ErrorRecord
from ..services.session import ConversionSession
from ..services.summary import render_summary_line

"""CLI entrypoint.

Commands:
- columns FILE: list header columns (letter code + title) of the first sheet
- convert FILE: convert with the mapping config, optionally merge duplicate
  recipients and export the order-import workbook

Every failed request is logged as ERROR and appended to the JSON Lines error log.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (SHIPSHEET_MAPPING etc.)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="shipsheet", description="Spreadsheet -> shipping-order converter")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    cols = sub.add_parser("columns", help="List header columns of the first sheet")
    cols.add_argument("file", type=Path)

    conv = sub.add_parser("convert", help="Convert a spreadsheet into shipping orders")
    conv.add_argument("file", type=Path)
    conv.add_argument("--mapping", type=Path, default=None, help="Mapping config (YAML)")
    conv.add_argument("--merge", action="store_true", help="Merge duplicate recipients")
    conv.add_argument("--output", type=Path, default=None, help="Output .xlsx path")
    return p.parse_args(argv)


def _record_failure(error_log: ErrorLogBuffer, file: Path | None, operation: str, e: Exception) -> None:
    error_type = getattr(e, "error_type", type(e).__name__.upper())
    error_log.append(ErrorRecord.create(str(file or ""), operation, error_type, str(e)))
    error_log.flush()


def _cmd_columns(args: argparse.Namespace, error_log: ErrorLogBuffer) -> int:
    logger = setup_logging()
    try:
        columns = read_columns(args.file)
    except ShipsheetError as e:
        logger.error(f"columns: {e}")
        _record_failure(error_log, args.file, "columns", e)
        return EXIT_FATAL
    for col in columns:
        print(f"{col.code}\t{col.title}")
    logger.info(f"{len(columns)} columns in: {args.file.name}")
    return EXIT_SUCCESS


def _cmd_convert(args: argparse.Namespace, error_log: ErrorLogBuffer) -> int:
    logger = setup_logging()

    config_path = resolve_config_path(args.mapping)
    mapping = None
    merge = args.merge
    if config_path is None:
        logger.info("no mapping config; using fixed-column preset")
    else:
        try:
            cfg = load_config(config_path)
        except ConfigError as e:
            logger.error(f"config: {e}")
            _record_failure(error_log, config_path, "config", e)
            return EXIT_FATAL
        mapping = cfg.mappings
        merge = merge or cfg.merge_duplicates

    session = ConversionSession()
    operation = "convert"
    try:
        result = session.convert(args.file, mapping)
        logger.info(f"converted {result.total_rows} rows ({result.duplicate_count} in duplicate groups)")
        if merge:
            operation = "merge"
            session.merge()
        exported = 0
        if args.output is not None:
            operation = "export"
            exported = session.export(args.output)
        else:
            logger.info("no --output given; nothing exported")
    except ShipsheetError as e:
        logger.error(f"{operation}: {e}")
        _record_failure(error_log, args.output if operation == "export" else args.file, operation, e)
        return EXIT_FATAL

    summary_line = render_summary_line(result, merged=merge, exported=exported)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] をそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    setup_logging(debug=args.debug)
    _load_env_file(Path(".env"))
    error_log = ErrorLogBuffer()

    if args.command == "columns":
        return _cmd_columns(args, error_log)
    return _cmd_convert(args, error_log)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
