import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .files import CodegenFileError
from .types import mk_library, mk_scope
from .validation import validate_scope

logger = logging.getLogger(__name__)


def _load_manifest(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: manifest must be a JSON object")
    return data


def cmd_render(args: argparse.Namespace) -> int:
    scope = mk_scope(_load_manifest(args.manifest))
    print(scope.to_string())
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    manifest = _load_manifest(args.manifest)
    if args.out_dir:
        manifest["path"] = args.out_dir
    lib = mk_library(manifest)
    try:
        written = lib.generate()
    except CodegenFileError as e:
        print(f"error: {e}", file=sys.stderr)
        if e.__cause__ is not None:
            print(f"  caused by: {e.__cause__}", file=sys.stderr)
        return 1
    for path in written:
        print(f"Wrote {path}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    manifest = _load_manifest(args.manifest)
    try:
        scope = mk_scope(manifest)
    except ValueError as e:
        # duplicate modules and mixed field styles are rejected while building
        print(e)
        return 1
    result = validate_scope(scope)
    for err in result.errors:
        print(err)
    if result.ok:
        print("OK")
        return 0
    return 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("rustgen")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(required=True)

    s = sub.add_parser("render", help="Print the Rust source of a JSON scope manifest")
    s.add_argument("manifest", help="Path to a scope manifest")
    s.set_defaults(func=cmd_render)

    s = sub.add_parser("generate", help="Write the files of a JSON library manifest")
    s.add_argument("manifest", help="Path to a library manifest")
    s.add_argument("--out-dir", dest="out_dir", help="Override the library path from the manifest")
    s.set_defaults(func=cmd_generate)

    s = sub.add_parser("check", help="Report construction errors in a JSON scope manifest")
    s.add_argument("manifest", help="Path to a scope manifest")
    s.set_defaults(func=cmd_check)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    logger.debug("running %s on %s", args.func.__name__, args.manifest)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
