"""Find and signal processes by the name of their executable, using /proc."""

from __future__ import annotations

import json
import logging
import os
import re

from wclkit.aggregate import new_aggregate

_PROC_ROOT = "/proc"
_FIELD = re.compile(r"[^\s:]+")

log = logging.getLogger(__name__)


def get_pids(pattern: str | re.Pattern) -> list[int]:
    """Return the pids whose executable (first command-line field) matches pattern."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    pids: list[int] = []
    try:
        entries = os.scandir(_PROC_ROOT)
    except OSError:
        return []
    with entries:
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            name = entry.name
            if not (name.isascii() and name.isdigit()):
                continue
            cmdline_path = os.path.join(_PROC_ROOT, name, "cmdline")
            try:
                with open(cmdline_path, "rb") as handle:
                    cmdline = handle.read()
            except OSError as exc:
                log.debug("Error reading file %s: %s", cmdline_path, exc)
                continue
            first = cmdline.split(b"\0", 1)[0].decode("utf-8", errors="replace")
            field = _FIELD.search(first)
            if field is None:
                continue
            if regex.search(field.group()):
                pids.append(int(name))
    return pids


def pid_of(name: str) -> list[int]:
    """Return the pids of processes whose executable is named name (a regular expression)."""
    if not name:
        raise ValueError("name should not be empty")
    return get_pids(re.compile("(^|/)" + name + "$"))


def pkill(name: str, sig: int) -> None:
    """Send sig to every process whose executable matches the regular expression name.

    Raises ProcessLookupError if nothing matches, and AggregateError
    holding the failures if any signal could not be delivered.
    """
    if not name:
        raise ValueError("name should not be empty")
    regex = re.compile(name)
    pids = get_pids(regex)
    if not pids:
        raise ProcessLookupError(
            f"unable to fetch pids for process name : {json.dumps(name)}"
        )
    errors: list[BaseException] = []
    for pid in pids:
        try:
            os.kill(pid, sig)
        except OSError as exc:
            errors.append(exc)
    failure = new_aggregate(errors)
    if failure is not None:
        raise failure