"""ToolGate CLI — inspect the blocklist, check paths, redact text and run commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from toolgate import __version__
from toolgate.config.loader import build_gate
from toolgate.config.settings import get_settings
from toolgate.core.exceptions import ConfigError, ExecutionFailure
from toolgate.core.models import UserBashEvent
from toolgate.logging_config import configure_logging
from toolgate.shield.executor import SubprocessExecutor
from toolgate.shield.redactor import SecretRedactor
from toolgate.shield.verdict import SPAWN_FAILURE_EXIT_CODE


def app(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 = success, non-zero = error or sensitive match).
    """
    parser = argparse.ArgumentParser(
        prog="toolgate",
        description="ToolGate — Policy gate and secret redaction for AI agent tool calls",
    )
    parser.add_argument("--version", action="version", version=f"toolgate {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser(
        "blocked-files",
        help="List file patterns blocked from reading, writing and editing, and redacted env vars",
    )

    check_parser = subparsers.add_parser("check-path", help="Check whether paths are classified as sensitive")
    check_parser.add_argument("paths", nargs="+", help="Paths exactly as a tool call would pass them")

    redact_parser = subparsers.add_parser("redact", help="Mask configured secret values in a file or stdin")
    redact_parser.add_argument("file", nargs="?", help="File to redact (defaults to stdin)")

    run_parser = subparsers.add_parser("run", help="Run a shell command and print its redacted output")
    run_parser.add_argument("--cwd", help="Working directory")
    run_parser.add_argument("shell_command", metavar="COMMAND", help="Command string passed to the shell")

    parsed = parser.parse_args(args)

    try:
        settings = get_settings()
        configure_logging(settings)
        if parsed.command == "blocked-files":
            return _cmd_blocked_files()
        elif parsed.command == "check-path":
            return _cmd_check_path(parsed.paths)
        elif parsed.command == "redact":
            return _cmd_redact(parsed.file)
        elif parsed.command == "run":
            return _cmd_run(parsed.shell_command, parsed.cwd)
        else:
            parser.print_help()
            return 1
    except (ConfigError, ValueError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 2


def _cmd_blocked_files() -> int:
    print(build_gate().listing().format())
    return 0


def _cmd_check_path(paths: list[str]) -> int:
    patterns = build_gate().patterns
    sensitive = 0
    for path in paths:
        matched = patterns.first_match(path)
        if matched is None:
            print(f"✓ {path}")
        else:
            sensitive += 1
            print(f"✗ {path}  [{matched}]")
    return 1 if sensitive else 0


def _cmd_redact(file_path: str | None) -> int:
    settings = get_settings()
    redactor = SecretRedactor.from_env(names_var=settings.secrets_env_var)
    if file_path is None:
        text = sys.stdin.read()
    else:
        path = Path(file_path)
        if not path.exists():
            print(f"✗ File not found: {file_path}", file=sys.stderr)
            return 1
        text = path.read_text(encoding="utf-8", errors="replace")
    sys.stdout.write(redactor.redact(text))
    return 0


def _cmd_run(command: str, cwd: str | None) -> int:
    settings = get_settings()
    executor = SubprocessExecutor(shell=settings.shell, timeout=settings.shell_timeout)
    gate = build_gate(settings, executor=executor)
    decision = asyncio.run(gate.on_user_bash(UserBashEvent(command=command, cwd=cwd)))

    shell = decision.shell_result
    if shell is None:
        # Nothing to redact: run directly, output is not intercepted.
        try:
            result = asyncio.run(executor.run(command, cwd=cwd))
        except ExecutionFailure as e:
            print(f"✗ {e}", file=sys.stderr)
            return SPAWN_FAILURE_EXIT_CODE
        sys.stdout.write(result.stdout + result.stderr)
        return _exit_status(result.code)

    sys.stdout.write(shell.output)
    if shell.cancelled:
        print("✗ Command was terminated", file=sys.stderr)
    return _exit_status(shell.exit_code)


def _exit_status(code: int | None) -> int:
    if code is None:
        return 1
    # Signal deaths are reported as negative codes.
    return 128 - code if code < 0 else code


if __name__ == "__main__":
    sys.exit(app())
