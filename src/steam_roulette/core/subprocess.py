"""Subprocess helpers that report failures with the command that caused them."""

import os
import subprocess
from collections.abc import Sequence
from typing import Any


def _format_command(cmd: Sequence[str]) -> str:
    return " ".join(str(arg) for arg in cmd)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Run a command to completion, capturing its text output.

    Wraps subprocess.run() to re-raise CalledProcessError and a missing binary
    as RuntimeError with operation context, exit code and captured output.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
            (e.g. "list installed Flatpak apps")
        check: Whether to raise on non-zero exit (default: True)
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        RuntimeError: If the command fails or its binary is not found
    """
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
            **kwargs,
        )
    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {_format_command(cmd)}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stdout and e.stdout.strip():
            error_msg += f"\nstdout: {e.stdout.strip()}"
        if e.stderr and e.stderr.strip():
            error_msg += f"\nstderr: {e.stderr.strip()}"

        raise RuntimeError(error_msg) from e

    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {_format_command(cmd)}"
        raise RuntimeError(error_msg) from e


def spawn_detached(cmd: Sequence[str], operation_context: str) -> None:
    """Start a command in the background without waiting for it.

    The child gets no stdin and its output is discarded. On POSIX it runs in
    its own session; on Windows it is started as a detached process.

    Raises:
        RuntimeError: If the process cannot be started
    """
    kwargs: dict[str, Any] = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
        "close_fds": True,
    }
    if os.name == "nt":
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    try:
        subprocess.Popen(list(cmd), **kwargs)
    except OSError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {_format_command(cmd)}"
        error_msg += f"\nError: {e}"
        raise RuntimeError(error_msg) from e
