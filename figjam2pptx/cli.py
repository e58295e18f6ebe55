"""Command line entry point.

    figjam2pptx export selection.json --format xml
    figjam2pptx render payload.json --format pptx -o board.pptx

``export`` reads a host selection dump ``{"page": {...}, "selection": [...]}``;
``render`` reads an extraction payload ``{"nodes": [...], "pageInfo": {...}}``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from figjam2pptx.config import get_settings
from figjam2pptx.errors import ExportError, UnsupportedFormatError
from figjam2pptx.export import ExportFormat, ExportResult, ExportService, load_payload

EXIT_OK = 0
EXIT_EXPORT_ERROR = 1
EXIT_USAGE = 2


def _load_json_dict(path: Path) -> dict:
    obj = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise TypeError(f"expected {path} to contain a JSON object")
    return obj


def _write_result(result: ExportResult, out: str | None) -> None:
    if out:
        out_path = Path(out)
        if isinstance(result.content, bytes):
            out_path.write_bytes(result.content)
        else:
            out_path.write_text(result.content, encoding="utf-8")
        print(f"[OK] {result.summary.message} -> {out_path}", file=sys.stderr)
    else:
        sys.stdout.write(result.content)
        sys.stdout.write("\n")

    if result.summary.type_counts:
        print(f"     types: {result.summary.types_description}", file=sys.stderr)


def _check_output(fmt: ExportFormat, out: str | None) -> None:
    if fmt.is_binary and not out:
        raise ValueError(f"--format {fmt.value} requires -o/--out")


def cmd_export(args: argparse.Namespace) -> int:
    """Extract a selection dump and write it in the requested format."""
    fmt = ExportFormat.parse(args.format)
    _check_output(fmt, args.out)

    dump = _load_json_dict(Path(args.input))
    selection = dump.get("selection")
    if selection is not None and not isinstance(selection, list):
        raise TypeError("'selection' must be a JSON array")

    service = ExportService(max_depth=args.max_depth)
    result = service.export(selection, dump.get("page"), fmt)
    _write_result(result, args.out)
    return EXIT_OK


def cmd_render(args: argparse.Namespace) -> int:
    """Render an already extracted payload."""
    fmt = ExportFormat.parse(args.format)
    _check_output(fmt, args.out)

    payload = load_payload(Path(args.input).read_bytes())
    service = ExportService()
    result = service.render(payload.nodes, payload.page_info, fmt)
    _write_result(result, args.out)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    formats = [f.value for f in ExportFormat]

    parser = argparse.ArgumentParser(
        prog="figjam2pptx",
        description="Convert FigJam selections to presentation-friendly JSON, XML or PPTX",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_export = sub.add_parser("export", help="Extract a host selection dump")
    p_export.add_argument("input", help="Selection dump JSON file")
    p_export.add_argument("--format", "-f", default=settings.default_format, choices=formats)
    p_export.add_argument("--out", "-o", help="Output file (default: stdout)")
    p_export.add_argument("--max-depth", type=int, default=None, help="Max container nesting depth")
    p_export.set_defaults(func=cmd_export)

    p_render = sub.add_parser("render", help="Render an extraction payload")
    p_render.add_argument("input", help="Extraction payload JSON file")
    p_render.add_argument("--format", "-f", default=settings.default_format, choices=formats)
    p_render.add_argument("--out", "-o", help="Output file (default: stdout)")
    p_render.set_defaults(func=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return args.func(args)
    except UnsupportedFormatError as e:
        print(f"[NG] {e}", file=sys.stderr)
        return EXIT_USAGE
    except ExportError as e:
        print(f"[NG] {e}", file=sys.stderr)
        return EXIT_EXPORT_ERROR
    except (OSError, ValueError, TypeError) as e:
        # ValidationError and JSONDecodeError are ValueErrors
        print(f"[NG] invalid input: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
