"""Command-line interface for any-json.

WHY: Most conversions are one-off jobs on files: turn this YAML into
JSON, merge these documents into one array, explode this CSV into one
file per row. The CLI wires the conversion facade to the file system for
those three jobs.

HOW: ``run()`` is a coroutine that takes the argument list and returns
the text that should be printed (or "" when output went to a file).
argparse handles the three sub-commands; ``convert`` is implied when the
first argument is not a command. Before that, the legacy single-dash
options of the 2.x tool (-j, -c, -h, -format=, -opt) are recognised.
``main()`` runs ``run()`` with asyncio.run(), prints the result, and turns
conversion errors into "Error: ..." on stderr with exit status 1.

RULES:
- Commands: convert (default), combine, split
- Input format: --input-format, else the input file's extension
- Output format: --output-format, else the output file's extension,
  else DEFAULT_OUTPUT_FORMAT (json)
- ".yml" files are YAML
- Input is read as bytes and decoded by the codec; binary formats are
  written as bytes, text formats as UTF-8
- Reading standard input requires an explicit input format
- combine decodes its inputs concurrently; split writes concurrently
- -? / --help returns the usage text; --version the version line
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from any_json import __version__, default_converter
from any_json.codecs.base import Payload
from any_json.config import DEFAULT_OUTPUT_FORMAT, LOG_LEVEL
from any_json.core.converter import Converter
from any_json.core.errors import ConversionError, MissingFormatError
from any_json.core.formats import format_from_filename
from any_json.core.values import json_default

logger = logging.getLogger(__name__)

COMMANDS = ("convert", "combine", "split")
HELP_FLAGS = ("-?", "--help")
LEGACY_OPTIONS = ("j", "c", "h", "format", "opt")

OPT_UNSUPPORTED = """The "opt" argument is no longer supported.
Please open an issue on GitHub describing your need:

    https://github.com/any-json/any-json
"""

USAGE = """usage: any-json [command] FILE [options] [OUT_FILE]

any-json can be used to convert (almost) anything to JSON.

This version supports:
    {formats}

command:
    convert    convert between formats (default when none specified)
    combine    combine multiple documents
    split      splits a document (containing an array) into multiple documents

options:
    -?, --help               Prints this help and exits.
    --version                Prints version information and exits.
    --input-format=FORMAT    Specifies the format of the input (assumed by
                             file extension when not provided).
    --output-format=FORMAT   Specifies the format of the output (default:
                             {default} or assumed by file extension when
                             available).
    -v, --verbose            Log each file read and written to stderr.

combine (additional options):
    --out=OUT_FILE           The output file.

split:
    any-json split FILE OUT_PATTERN
    OUT_PATTERN may reference fields of each element, e.g. out/{{id}}.json"""


class CLIError(Exception):
    """Raised for command-line usage problems the argument parser cannot catch.

    RULES:
    - The message is printed as-is after "Error: "
    """


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _read_input(file_name: Optional[str], format_name: str) -> bytes:
    """Read a file (or stdin for None / "-") as raw bytes for the codec."""
    if file_name is None or file_name == "-":
        logger.debug("Reading %s from standard input", format_name)
        return sys.stdin.buffer.read()

    logger.debug("Reading %s as %s", file_name, format_name)
    return Path(file_name).read_bytes()


def _write_output(path: Path, content: Payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s", path)


class _Placeholders(dict):
    """format_map() source that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _output_name(pattern: str, item: Any) -> str:
    """Fill ``pattern`` ("out/{id}.json") with the fields of ``item``."""
    fields = _Placeholders(item) if isinstance(item, Mapping) else _Placeholders()
    return pattern.format_map(fields)


# ---------------------------------------------------------------------------
# Conversion steps
# ---------------------------------------------------------------------------


async def _decode_file(
    converter: Converter,
    file_name: Optional[str],
    input_format: Optional[str],
) -> Any:
    format_name = input_format or format_from_filename(file_name)
    if not format_name:
        raise MissingFormatError()
    contents = _read_input(file_name, format_name)
    return await converter.decode(contents, format_name)


async def _emit(
    converter: Converter,
    value: Any,
    output_format: Optional[str],
    output_file: Optional[str],
) -> Payload:
    """Encode ``value``; write it to ``output_file`` or return it for printing."""
    format_name = output_format or format_from_filename(output_file) or DEFAULT_OUTPUT_FORMAT
    result = await converter.encode(value, format_name)
    if output_file:
        _write_output(Path(output_file), result)
        return ""
    return result


async def _convert(args: argparse.Namespace, converter: Converter) -> Payload:
    value = await _decode_file(converter, args.input_file, args.input_format)
    return await _emit(converter, value, args.output_format, args.output_file)


async def _combine(args: argparse.Namespace, converter: Converter) -> Payload:
    items = await asyncio.gather(
        *(_decode_file(converter, name, args.input_format) for name in args.input_files)
    )
    return await _emit(converter, list(items), args.output_format, args.out)


async def _split(args: argparse.Namespace, converter: Converter) -> Payload:
    value = await _decode_file(converter, args.input_file, args.input_format)
    if not isinstance(value, list):
        raise CLIError("split only works on arrays")

    async def _write_item(item: Any) -> str:
        file_name = _output_name(args.output_pattern, item)
        await _emit(converter, item, args.output_format, file_name)
        return "{} written".format(file_name)

    written = await asyncio.gather(*(_write_item(item) for item in value))
    return "\n".join(written)


# ---------------------------------------------------------------------------
# Legacy (2.x) argument format
# ---------------------------------------------------------------------------


def _parse_legacy(argv: Sequence[str]) -> Optional[Tuple[Dict[str, Any], List[str]]]:
    """Split ``-name[=value]`` options from file names.

    Returns None when no legacy option is present, so the arguments are
    handled by the regular parser instead.
    """
    options: Dict[str, Any] = {}
    unnamed: List[str] = []
    for arg in argv:
        if arg.startswith("-") and arg != "-":
            name, sep, value = arg[1:].partition("=")
            options[name] = value if sep else True
        else:
            unnamed.append(arg)

    if not any(key in options for key in LEGACY_OPTIONS):
        return None
    return options, unnamed


async def _run_legacy(
    options: Dict[str, Any],
    unnamed: List[str],
    converter: Converter,
) -> Payload:
    if options.get("opt"):
        return OPT_UNSUPPORTED

    input_format = options.get("format")
    if not isinstance(input_format, str):
        input_format = None

    if unnamed:
        file_name: Optional[str] = unnamed[0]
    elif input_format:
        file_name = None
    else:
        raise CLIError(
            "too few arguments: please specify the file to convert\n"
            "for help use 'any-json -?'"
        )

    value = await _decode_file(converter, file_name, input_format)

    if options.get("c"):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=json_default)
    if options.get("h"):
        return await converter.encode(value, "hjson")
    return await converter.encode(value, "json")


# ---------------------------------------------------------------------------
# Parser and entry points
# ---------------------------------------------------------------------------


def help_text(converter: Converter = default_converter) -> str:
    return USAGE.format(formats=", ".join(converter.formats), default=DEFAULT_OUTPUT_FORMAT)


def version_text() -> str:
    return "any-json version {}".format(__version__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the three sub-commands.

    The top-level help flags are handled by run() before parsing, so the
    parser itself only sees a command followed by its arguments.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--input-format",
        metavar="FORMAT",
        default=None,
        help="Format of the input (assumed by file extension when not provided).",
    )
    common.add_argument(
        "--output-format",
        metavar="FORMAT",
        default=None,
        help="Format of the output (default: {} or assumed by file extension "
             "when available).".format(DEFAULT_OUTPUT_FORMAT),
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each file read and written to stderr.",
    )

    parser = argparse.ArgumentParser(
        prog="any-json",
        description="Convert (almost) anything to JSON, and back.",
        add_help=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser(
        "convert",
        parents=[common],
        help="convert between formats (default when none specified)",
    )
    convert.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="File to convert; standard input when omitted or '-'.",
    )
    convert.add_argument(
        "output_file",
        nargs="?",
        default=None,
        help="Where to write the result; standard output when omitted.",
    )
    convert.set_defaults(handler=_convert)

    combine = subparsers.add_parser(
        "combine",
        parents=[common],
        help="combine multiple documents into one array",
    )
    combine.add_argument("input_files", nargs="+", metavar="FILE")
    combine.add_argument("--out", metavar="OUT_FILE", default=None, help="The output file.")
    combine.set_defaults(handler=_combine)

    split = subparsers.add_parser(
        "split",
        parents=[common],
        help="split a document containing an array into multiple documents",
    )
    split.add_argument("input_file", help="File containing an array.")
    split.add_argument(
        "output_pattern",
        help="Output file name pattern, filled with each element's fields, e.g. out/{id}.json.",
    )
    split.set_defaults(handler=_split)

    return parser


async def run(
    argv: Sequence[str],
    converter: Optional[Converter] = None,
) -> Payload:
    """Execute one command line and return what should be printed.

    Args:
        argv: Arguments without the program name.
        converter: Converter to use (default: every bundled codec).

    Returns:
        The converted document, a status listing, or "" when the output
        was written to a file.
    """
    converter = converter or default_converter
    argv = list(argv)

    if "--version" in argv:
        return version_text()
    if not argv or any(flag in argv for flag in HELP_FLAGS):
        return help_text(converter)

    if argv[0] not in COMMANDS:
        legacy = _parse_legacy(argv)
        if legacy is not None:
            return await _run_legacy(legacy[0], legacy[1], converter)
        argv = ["convert"] + argv

    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger("any_json").setLevel(logging.DEBUG)
    return await args.handler(args, converter)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``any-json`` console script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Conversion, usage and file errors exit with status 1
    """
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    try:
        result = asyncio.run(run(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        sys.exit(130)
    except (ConversionError, CLIError, OSError) as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    if isinstance(result, bytes):
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
    elif result:
        print(result)


if __name__ == "__main__":
    main()
