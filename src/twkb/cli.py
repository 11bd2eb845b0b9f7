"""Command line interface: ``twkb decode | encode | inspect``.

    twkb decode 0100b2db0de4d920            -> GeoJSON on stdout
    twkb encode shape.geojson --digits-xy 3  -> hex TWKB on stdout
    twkb inspect 0100b2db0de4d920           -> header fields as JSON

Write defaults come from TwkbSettings (``TWKB_*`` environment variables).
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys

from loguru import logger

from twkb.config import settings
from twkb.errors import TwkbError
from twkb.geojson import from_geojson, to_geojson
from twkb.reader import decode, decode_header
from twkb.writer import WriteOptions, encode_with


def _configure_logging(level: str) -> None:
    logger.enable("twkb")
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _cmd_decode(args: argparse.Namespace) -> int:
    geometry = decode(args.hex, is_hex=True)
    print(json.dumps(to_geojson(geometry), indent=args.indent))
    return 0


def _cmd_encode(args: argparse.Namespace) -> int:
    if args.file in (None, "-"):
        text = sys.stdin.read()
    else:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()

    overrides = {
        "digits_xy": args.digits_xy,
        "digits_z": args.digits_z,
        "digits_m": args.digits_m,
        "include_size": args.size,
        "include_bounding_box": args.bbox,
    }
    options = dataclasses.replace(
        WriteOptions.from_settings(settings),
        **{k: v for k, v in overrides.items() if v is not None},
    )
    print(encode_with(from_geojson(text), options, as_hex=True))
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    header = decode_header(args.hex, is_hex=True)
    fields = dataclasses.asdict(header)
    fields["kind"] = header.kind.name
    print(json.dumps(fields, indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twkb", description="Tiny Well-known Binary codec")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--indent", type=int, default=None, help="JSON indent for output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_decode = sub.add_parser("decode", help="Decode hex TWKB to GeoJSON")
    p_decode.add_argument("hex", help="Hex-encoded TWKB")
    p_decode.set_defaults(func=_cmd_decode)

    p_encode = sub.add_parser("encode", help="Encode GeoJSON to hex TWKB")
    p_encode.add_argument("file", nargs="?", help="GeoJSON file (default: stdin)")
    p_encode.add_argument("--digits-xy", type=int, default=None, help="Decimal places for X/Y")
    p_encode.add_argument("--digits-z", type=int, default=None, help="Decimal places for Z")
    p_encode.add_argument("--digits-m", type=int, default=None, help="Decimal places for M")
    p_encode.add_argument("--size", action="store_true", default=None, help="Include size attribute")
    p_encode.add_argument("--bbox", action="store_true", default=None, help="Include bounding box")
    p_encode.set_defaults(func=_cmd_encode)

    p_inspect = sub.add_parser("inspect", help="Show the header of hex TWKB")
    p_inspect.add_argument("hex", help="Hex-encoded TWKB")
    p_inspect.set_defaults(func=_cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging("DEBUG" if args.verbose else settings.log_level)
    try:
        return args.func(args)
    except TwkbError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(f"twkb: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
