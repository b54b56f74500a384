"""File-system helpers: existence checks, writing, copying, sizes and hashes."""

from __future__ import annotations

import base64
import hashlib
import os
import posixpath
import stat
import sys
from typing import BinaryIO

_CHUNK = 10240


def is_dir(directory: str, entry: os.DirEntry) -> bool:
    """Return True if entry is a directory, following symbolic links.

    A broken link is not a directory.
    """
    if entry.is_dir(follow_symlinks=False):
        return True
    if not entry.is_symlink():
        return False
    return os.path.isdir(os.path.join(directory, entry.name))


def check_directory_exist(directory: str) -> bool:
    """Return True if directory exists and is a directory."""
    return os.path.isdir(directory)


def check_file_exist(path: str) -> bool:
    """Return True if path exists and is not a directory."""
    try:
        info = os.stat(path)
    except (OSError, ValueError):
        return False
    return not stat.S_ISDIR(info.st_mode)


def ensure_directory(directory: str) -> None:
    """Create directory (and its parents) unless it already exists.

    Raises FileExistsError if a file stands in its place and OSError if
    it could not be created.
    """
    if check_directory_exist(directory):
        return
    if check_file_exist(directory):
        raise FileExistsError(f"{directory} is a file")
    try:
        os.makedirs(directory, 0o777, exist_ok=True)
    except OSError:
        pass
    if not check_directory_exist(directory):
        raise OSError(f"create direcory {directory} error")


def check_path_a_under_b(a: str, b: str) -> bool:
    """Return True if path a lies inside (or is) path b, compared lexically."""
    if os.path.isabs(a) != os.path.isabs(b):
        return False
    try:
        rel = os.path.relpath(a, b)
    except ValueError:
        return False
    return ".." not in rel


def _executable_path() -> str:
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0 in ("", "-c", "-"):
        argv0 = sys.executable
    if not argv0:
        raise OSError("cannot determine the executable path")
    return os.path.realpath(argv0)


def get_executable_dir() -> str:
    """Return the absolute directory of the running program."""
    return os.path.dirname(_executable_path())


def get_executable_name() -> str:
    """Return the file name of the running program."""
    return os.path.basename(_executable_path())


def write_file(directory: str, filename: str, content: str | bytes) -> None:
    """Write content to directory/filename, creating the directory if needed."""
    try:
        ensure_directory(directory)
    except OSError as exc:
        raise OSError(f"check directory failed: {exc}") from exc
    data = content.encode("utf-8") if isinstance(content, str) else content
    with open(posixpath.join(directory, filename), "wb") as handle:
        handle.write(data)


def write_fullpath_file(path: str, content: str | bytes) -> None:
    """Write content to path, creating its directory if needed."""
    write_file(posixpath.dirname(path), posixpath.basename(path), content)


def open_file_reader(path: str) -> BinaryIO:
    """Open path for buffered binary reading."""
    return open(path, "rb")


def _chunks(path: str):
    with open(path, "rb") as handle:
        while chunk := handle.read(_CHUNK):
            yield chunk


def _encode_digest(digest: bytes) -> str:
    return base64.urlsafe_b64encode(digest).decode("ascii")


def get_file_size(path: str) -> int:
    """Return the number of bytes that can be read from path."""
    return sum(len(chunk) for chunk in _chunks(path))


def get_file_hash_sha256(path: str) -> str:
    """Return the SHA-256 of the file's contents, URL-safe base64 encoded."""
    hasher = hashlib.sha256()
    for chunk in _chunks(path):
        hasher.update(chunk)
    return _encode_digest(hasher.digest())


def get_content_hash_sha256(data: bytes) -> str:
    """Return the SHA-256 of data, URL-safe base64 encoded."""
    return _encode_digest(hashlib.sha256(data).digest())


def get_file_size_and_hash(path: str) -> tuple[int, str]:
    """Return the size of the file and its SHA-256 hash."""
    return get_file_size(path), get_file_hash_sha256(path)


def compare_file(path1: str, path2: str) -> bool:
    """Return True if both files hold the same bytes."""
    return get_file_hash_sha256(path1) == get_file_hash_sha256(path2)


def compare_file_and_content(path: str, content: str | bytes) -> bool:
    """Return True if the file holds exactly content."""
    with open(path, "rb") as handle:
        data = handle.read()
    expected = content.encode("utf-8") if isinstance(content, str) else content
    return data == expected


def copy_file(source: str, dest: str) -> int:
    """Copy source to dest, replacing dest; return the number of bytes copied."""
    written = 0
    with open(source, "rb") as src:
        fd = os.open(dest, os.O_WRONLY | os.O_TRUNC | os.O_CREAT, 0o644)
        with os.fdopen(fd, "wb") as dst:
            while chunk := src.read(_CHUNK):
                dst.write(chunk)
                written += len(chunk)
    return written