"""System clipboard access."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys


class ClipboardError(Exception):
    """Raised when text could not be copied to the clipboard."""


def _clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_to_clipboard(text: str) -> None:
    """Copy *text* using the first available clipboard tool.

    Raises:
        ClipboardError: No tool is installed, or the tool failed.
    """
    commands = [c for c in _clipboard_commands() if shutil.which(c[0]) is not None]
    if not commands:
        names = ", ".join(c[0] for c in _clipboard_commands())
        raise ClipboardError(f"no clipboard tool found (tried {names})")

    last_error = ""
    for command in commands:
        try:
            proc = subprocess.run(command, input=text, text=True, capture_output=True, check=False, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            last_error = f"{command[0]}: {e}"
            continue
        if proc.returncode == 0:
            return
        last_error = f"{command[0]} exited with status {proc.returncode}"

    raise ClipboardError(last_error)
