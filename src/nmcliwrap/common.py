"""Shared types, constants and helpers for nmcliwrap."""

from __future__ import annotations

import os
import re
import subprocess
from typing import Any, Protocol

# -- Defaults --
NMCLI_BINARY = "nmcli"
SUDO_BINARY = "sudo"
DEFAULT_TIMEOUT = 120  # seconds; `nmcli con up` waits up to 90s for activation

# One parsed block of ``KEY: VALUE`` lines, in emission order.
Record = dict[str, str]

# -- Rich colour names used by the display layer --
GREEN = "green"
YELLOW = "yellow"
RED = "red"
GREY = "grey50"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CommandFailure(RuntimeError):
    """Raised when an nmcli invocation does not exit cleanly.

    Carries the captured output as the message.  ``returncode`` is ``None``
    when the process could not be started or timed out.
    """

    def __init__(
        self,
        output: list[str],
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
    ) -> None:
        self.output = list(output)
        self.command = list(command or [])
        self.returncode = returncode
        super().__init__("nmcli command failed: " + "\n".join(self.output))


# ---------------------------------------------------------------------------
# Command runner protocol (subprocess injection seam)
# ---------------------------------------------------------------------------

class CommandRunner(Protocol):
    """Protocol for running external commands.

    Provides an injection seam so callers can substitute a fake runner in
    tests instead of patching ``subprocess`` globally.
    """

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* and return a CompletedProcess."""
        ...  # pragma: no cover


class SubprocessRunner:
    """Default CommandRunner that delegates to the real ``subprocess`` module."""

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* via ``subprocess.run``.

        Text output is decoded as UTF-8; undecodable bytes become U+FFFD.
        """
        return subprocess.run(
            cmd,
            capture_output=capture_output,
            text=text,
            encoding="utf-8" if text else None,
            errors="replace" if text else None,
            timeout=timeout,
            env=env,
        )


def _minimal_env() -> dict[str, str]:
    """Build a minimal environment for subprocess calls.

    Only passes PATH, LC_ALL, and HOME.  ``LC_ALL=C`` keeps nmcli's state
    strings (``activated``, ``unavailable``...) untranslated.
    """
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "LC_ALL": "C",
        "HOME": os.environ.get("HOME", ""),
    }


# ---------------------------------------------------------------------------
# Signal / security helpers
# ---------------------------------------------------------------------------

_DIGITS_RE = re.compile(r"(\d+)")


def parse_signal_strength(signal: str) -> int:
    """Extract a signal percentage from an nmcli SIGNAL field.

    Accepts plain numbers (``"85"``) as well as decorated values such as
    ``"85%"``.  Returns 0 when no digits are present.
    """
    signal = signal.strip()
    if signal.isdecimal():
        return int(signal)
    match = _DIGITS_RE.search(signal)
    if match:
        return int(match.group(1))
    return 0


def signal_quality(strength: int) -> str:
    """Bucket a 0-100 signal strength into a human-readable label."""
    if strength >= 80:
        return "Excellent"
    if strength >= 70:
        return "Very Good"
    if strength >= 60:
        return "Good"
    if strength >= 50:
        return "Fair"
    if strength >= 30:
        return "Weak"
    return "Very Weak"


def is_secured(security: str) -> bool:
    """Return True unless *security* is empty, ``--`` or ``none``."""
    s = security.strip().lower()
    return bool(s) and s not in ("--", "none")


def signal_color(strength: int) -> str:
    """Return a Rich colour name for a signal percentage."""
    if strength >= 70:
        return GREEN
    if strength >= 50:
        return YELLOW
    return RED


def security_color(security: str) -> str:
    """Return a Rich colour name based on the security string."""
    if not is_secured(security):
        return RED
    if "wep" in security.lower():
        return YELLOW
    return GREEN
