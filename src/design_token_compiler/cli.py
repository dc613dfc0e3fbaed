# src/design_token_compiler/cli.py
import argparse
import logging
import sys
from pathlib import Path

from .checks.breaking import check_breaking, report_lines
from .checks.discovery import ValidationResult
from .checks.format import validate_format
from .checks.naming import NAMING_CONVENTIONS, validate_naming
from .pipeline.general.utils.load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
)
from .pipeline.orchestrator import BuildConfigError, BuildError, build_all_platforms, load_build_config
from .pipeline.tokens.resolve import TokenSourceError

FATAL_ERRORS = (
    BuildConfigError,
    BuildError,
    TokenSourceError,
    DataDirNotFound,
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
)


def _build(args: argparse.Namespace) -> int:
    config = load_build_config(args.config)
    title = config.options.get("title")
    print(f"🎨 {title} - Building for all platforms...\n")
    files = build_all_platforms(config, root=args.root, only=args.platform)
    print("✅ Build complete! Generated outputs:")
    for f in files:
        print(f"   • {f.path}")
    return 0


def _check_breaking(args: argparse.Namespace) -> int:
    print("🔍 Checking for breaking changes...\n")
    report = check_breaking(args.baseline, args.tokens)
    if report is None:
        print(f'⚠️  No baseline directory found at "{args.baseline}"')
        print("   Run with a baseline to detect breaking changes.\n")
        print("   To create a baseline, copy your current tokens:")
        print(f"   cp -r {args.tokens} {args.baseline}\n")
        return 0
    print("\n".join(report_lines(report)) + "\n")
    return report.exit_code


def _print_validation(result: ValidationResult, tokens_dir: str, success: str) -> bool:
    """Print the file list, warnings and errors; returns False when there was nothing to check."""
    if not result.files:
        print(f"⚠️  No token files found in {tokens_dir}/ directory")
        return False
    print(f"Found {len(result.files)} token file(s):\n")
    for label in result.files:
        print(f"  📄 {label}")
    print()
    if result.warnings:
        print(f"⚠️  {len(result.warnings)} warning(s):\n")
        for w in result.warnings:
            print(f"   {w}")
        print()
    if result.errors:
        print(f"❌ {len(result.errors)} error(s):\n")
        for e in result.errors:
            print(f"   {e}")
        print()
    else:
        print(f"✅ {success}\n")
    return True


def _validate_naming(args: argparse.Namespace) -> int:
    print("🔍 Validating token naming conventions...\n")
    result = validate_naming(args.tokens)
    if _print_validation(result, args.tokens, "All token names follow conventions!") and not result.ok:
        print("Naming conventions:")
        for rule in NAMING_CONVENTIONS:
            print(f"  • {rule}")
        print()
    return result.exit_code


def _validate_format(args: argparse.Namespace) -> int:
    print("🔍 Validating token format...\n")
    result = validate_format(args.tokens)
    _print_validation(result, args.tokens, "All tokens are valid!")
    return result.exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="design-tokens",
        description="Build design tokens for every platform and check token trees.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Resolve, transform and render all platforms")
    build.add_argument("--config", type=Path, default=None, help="Platform config JSON (default: bundled platforms.json)")
    build.add_argument("--root", type=Path, default=Path("."), help="Directory token sources and outputs are relative to")
    build.add_argument(
        "--platform",
        action="append",
        default=None,
        help="Only build this platform (repeatable)",
    )
    build.set_defaults(handler=_build)

    breaking = sub.add_parser("check-breaking", help="Compare tokens against a baseline tree")
    breaking.add_argument("baseline", nargs="?", default="tokens-baseline", help="Baseline token directory")
    breaking.add_argument("--tokens", default="tokens", help="Current token directory")
    breaking.set_defaults(handler=_check_breaking)

    naming = sub.add_parser("validate-naming", help="Check token key naming conventions")
    naming.add_argument("--tokens", default="tokens", help="Token directory")
    naming.set_defaults(handler=_validate_naming)

    fmt = sub.add_parser("validate-format", help="Check token values and types")
    fmt.add_argument("--tokens", default="tokens", help="Token directory")
    fmt.set_defaults(handler=_validate_format)

    return parser


def main(argv=None) -> int:
    """CLI entry point: dispatch to the sub-command; known failures print ❌ and return 1."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args)
    except FATAL_ERRORS as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
