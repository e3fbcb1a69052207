"""
secrets-guardian command line

    secrets-guardian scan "some text"
    secrets-guardian scan --command export DB_PASSWORD=hunter22
    secrets-guardian scan --file config/settings.py
    echo "text" | secrets-guardian scan
    secrets-guardian patterns
    secrets-guardian hook

``scan`` prints the result as JSON and exits 1 when secrets were found.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import IO, Any, Optional, Sequence

from secrets_guardian import __version__
from secrets_guardian.config.settings import GuardianSettings
from secrets_guardian.core.secret_scanner.patterns import load_registry
from secrets_guardian.core.secret_scanner.scanner import SecretScanner
from secrets_guardian.hooks.guardian import run_hook
from secrets_guardian.hooks.runtime import read_payload
from secrets_guardian.logging.setup import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_SAFE = 0
EXIT_BLOCKED = 1


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="secrets-guardian",
        description="Detect exposed credentials in text, commands and files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Pattern configuration file (default: $SECRETS_GUARDIAN_CONFIG or the built-in patterns)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan text, a shell command or a file")
    source = scan.add_mutually_exclusive_group()
    source.add_argument("--file", type=Path, help="Scan the contents of this file")
    source.add_argument(
        "--command",
        dest="shell_command",
        nargs=argparse.REMAINDER,
        help="Scan the rest of the command line as a shell command",
    )
    scan.add_argument("text", nargs="*", help="Text to scan (stdin when omitted)")

    subparsers.add_parser("patterns", help="List the compiled pattern categories")
    subparsers.add_parser("hook", help="Run as a Claude Code hook (event JSON on stdin)")

    return parser.parse_args(argv)


def _write_json(stream: IO[str], data: dict[str, Any]) -> None:
    stream.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def _not_scanned(status: str, message: str) -> dict[str, Any]:
    return {
        "status": status,
        "error": message,
        "findings": [],
        "blocked": False,
        "recommendations": [],
    }


def _scan(
    args: argparse.Namespace,
    scanner: SecretScanner,
    settings: GuardianSettings,
    stdin: IO[str],
    stdout: IO[str],
) -> int:
    if args.file is not None:
        try:
            size = args.file.stat().st_size
            if size > settings.max_file_size:
                logger.info(f"Skipping {args.file}: {size} bytes exceeds {settings.max_file_size}")
                _write_json(
                    stdout,
                    _not_scanned(
                        "skipped",
                        f"File is larger than {settings.max_file_size} bytes",
                    ),
                )
                return EXIT_SAFE
            result = scanner.scan_file(args.file)
        except OSError as e:
            _write_json(stdout, _not_scanned("error", str(e)))
            return EXIT_SAFE
    elif args.shell_command:
        result = scanner.scan(" ".join(args.shell_command))
    elif args.text:
        result = scanner.scan(" ".join(args.text))
    else:
        result = scanner.scan(read_payload(stdin))

    _write_json(stdout, result.to_dict())
    return EXIT_BLOCKED if result.blocked else EXIT_SAFE


def _list_patterns(scanner: SecretScanner, stdout: IO[str]) -> int:
    registry = scanner.registry
    rejected: dict[str, int] = {}
    for r in registry.rejected:
        rejected[r.category] = rejected.get(r.category, 0) + 1

    _write_json(
        stdout,
        {
            "source": "default" if registry.is_default else "config",
            "categories": {
                name: {
                    "compiled": len(patterns),
                    "rejected": rejected.get(name, 0),
                }
                for name, patterns in registry.categories.items()
            },
            "total": len(registry),
        },
    )
    return EXIT_SAFE


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Run the command line tool and return its exit code."""
    args = parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    settings = GuardianSettings.from_env()
    if args.config is not None:
        settings = replace(settings, config_path=args.config)

    if args.command == "hook":
        return run_hook(stdin, stderr, settings)

    scanner = SecretScanner(load_registry(settings.config_path))
    if args.command == "patterns":
        return _list_patterns(scanner, stdout)
    return _scan(args, scanner, settings, stdin, stdout)


def run() -> None:
    """Console script entry point."""
    settings = GuardianSettings.from_env()
    setup_logging(settings.log_level, settings.json_logs, settings.log_file)
    sys.exit(main())


if __name__ == "__main__":
    run()
