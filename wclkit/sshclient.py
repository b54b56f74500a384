"""Run commands on a remote host over SSH, either directly or through an interactive shell."""

from __future__ import annotations

import codecs
import logging
import re
import socket
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import paramiko

SSH_TIMEOUT = 60.0

_TERMINAL_NOISE = "\x1b[?2004l\r"
_RECV_SIZE = 32768
_PTY_TERM = "xterm"
_PTY_WIDTH = 80
_PTY_HEIGHT = 40

log = logging.getLogger(__name__)


@dataclass
class SSHConfig:
    """Timeouts (seconds) and the patterns that recognise a shell prompt and a password prompt."""

    timeout_ssh: float = SSH_TIMEOUT
    timeout_spawn: float = SSH_TIMEOUT
    reg_prompt: str = r"(\$|#)\s*$"
    reg_password: str = "Password"


@dataclass
class SSHCmd:
    """A command for an interactive shell; timeout is in seconds, 0 meaning the default."""

    cmd: str
    timeout: float = SSH_TIMEOUT
    stdout: bool = True
    stderr: bool = True
    combine: bool = True


@dataclass
class SSHSuTo:
    """The user to switch to with su before running commands."""

    username: str
    password: str = field(repr=False)
    expect_password: bool = True
    timeout: float = SSH_TIMEOUT


def strip_terminal_noise(output: str) -> str:
    """Remove the bracketed-paste reset sequence that shells print after each command."""
    return output.replace(_TERMINAL_NOISE, "")


def append_newline(content: str) -> str:
    """Return content ending in a newline."""
    return content if content.endswith("\n") else content + "\n"


def delete_last_line(content: str) -> str:
    """Return content without its last line (and without the newline before it)."""
    return "\n".join(content.split("\n")[:-1])


def _read_all(channel: Any) -> str:
    chunks: list[bytes] = []
    while chunk := channel.recv(_RECV_SIZE):
        chunks.append(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace")


def _with_partial(exc: BaseException, result: list[str], result_all: list[str]) -> BaseException:
    """Attach the output gathered so far to an exception before it is raised."""
    exc.result = "".join(result)  # type: ignore[attr-defined]
    exc.result_all = "".join(result_all)  # type: ignore[attr-defined]
    return exc


class _Shell:
    """Sends text to an interactive channel and waits for patterns in what comes back."""

    def __init__(self, channel: Any) -> None:
        self._channel = channel
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def send(self, text: str) -> None:
        self._channel.sendall(text.encode("utf-8"))

    def _take_all(self) -> str:
        output, self._buffer = self._buffer, ""
        return output

    def expect(self, pattern: re.Pattern, timeout: float) -> tuple[str, BaseException | None]:
        """Read until pattern matches; return the text read and the failure, if any."""
        deadline = time.monotonic() + timeout
        while True:
            match = pattern.search(self._buffer)
            if match:
                output = self._buffer[: match.end()]
                self._buffer = self._buffer[match.end():]
                return output, None
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self._take_all(), TimeoutError(
                    f"expect: timer expired after {timeout:g} seconds"
                )
            self._channel.settimeout(remaining)
            try:
                data = self._channel.recv(_RECV_SIZE)
            except socket.timeout:
                continue
            except (OSError, paramiko.SSHException) as exc:
                return self._take_all(), exc
            if not data:
                return self._take_all(), EOFError("ssh channel closed")
            self._buffer += self._decoder.decode(data)


@dataclass
class SSH:
    """A password-authenticated SSH connection, dialled on first use."""

    ip: str
    port: str | int = 22
    username: str = ""
    password: str = field(default="", repr=False)
    config: SSHConfig = field(default_factory=SSHConfig, repr=False)
    client: Any = field(default=None, repr=False)

    def dial(self) -> None:
        """Connect and authenticate; host keys are not verified."""
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                self.ip,
                port=int(self.port),
                username=self.username,
                password=self.password,
                timeout=self.config.timeout_ssh,
                allow_agent=False,
                look_for_keys=False,
            )
        except BaseException:
            client.close()
            raise
        self.client = client

    def close(self) -> None:
        """Close the connection."""
        if self.client is not None:
            self.client.close()
            self.client = None

    def _open_session(self) -> Any:
        if self.client is None:
            self.dial()
        transport = self.client.get_transport()
        if transport is None:
            raise ConnectionError("ssh client is not connected")
        return transport.open_session()

    def exec_v01(self, cmd: str) -> str:
        """Run one command and return its combined stdout and stderr.

        Raises RuntimeError if the command exits with a non-zero status.
        """
        if self.client is None:
            self.dial()
        try:
            channel = self._open_session()
        except (OSError, paramiko.SSHException) as exc:
            raise ConnectionError(f"create session error: {exc}") from exc
        try:
            channel.set_combine_stderr(True)
            channel.exec_command(cmd)
            output = _read_all(channel)
            status = channel.recv_exit_status()
        finally:
            channel.close()
        if status != 0:
            raise RuntimeError(f"run command error: Process exited with status {status}")
        return output

    def exec_v02(self, cmds: Iterable[str]) -> str:
        """Feed the commands, then exit, to a shell and return everything it printed.

        Raises RuntimeError if the shell exits with a non-zero status.
        """
        channel = self._open_session()
        try:
            channel.set_combine_stderr(True)
            channel.invoke_shell()
            script = "".join(append_newline(cmd) for cmd in cmds) + "exit\n"
            channel.sendall(script.encode("utf-8"))
            channel.shutdown_write()
            output = _read_all(channel)
            status = channel.recv_exit_status()
        finally:
            channel.close()
        if status != 0:
            raise RuntimeError(f"Process exited with status {status}")
        return output

    @contextmanager
    def _spawn(self) -> Iterator[_Shell]:
        channel = self._open_session()
        try:
            channel.get_pty(term=_PTY_TERM, width=_PTY_WIDTH, height=_PTY_HEIGHT)
            channel.invoke_shell()
            yield _Shell(channel)
        finally:
            channel.close()

    @staticmethod
    def _expect_or_fail(
        shell: _Shell,
        pattern: re.Pattern,
        timeout: float,
        result: list[str],
        result_all: list[str],
    ) -> None:
        output, err = shell.expect(pattern, timeout)
        result_all.append(strip_terminal_noise(output))
        if err is not None:
            raise _with_partial(err, result, result_all)

    @staticmethod
    def _send_or_fail(shell: _Shell, text: str, result: list[str], result_all: list[str]) -> None:
        try:
            shell.send(text)
        except (OSError, paramiko.SSHException) as exc:
            raise _with_partial(exc, result, result_all) from exc

    @staticmethod
    def _run_commands(
        shell: _Shell,
        prompt: re.Pattern,
        cmds: Iterable[SSHCmd],
        stop: bool,
        result: list[str],
        result_all: list[str],
    ) -> None:
        for command in cmds:
            timeout = command.timeout or SSH_TIMEOUT
            try:
                shell.send(append_newline(command.cmd))
            except (OSError, paramiko.SSHException) as exc:
                if stop:
                    raise _with_partial(exc, result, result_all) from exc
                log.warning("%s", exc)
            output, err = shell.expect(prompt, timeout)
            result_all.append(strip_terminal_noise(output))
            if command.stdout or command.stderr:
                result.append(strip_terminal_noise(delete_last_line(output)))
            if err is not None:
                if stop:
                    raise _with_partial(err, result, result_all)
                log.warning("%s", err)

    def exec_v03(self, cmds: Iterable[SSHCmd], stop: bool = False) -> tuple[str, str]:
        """Run commands in an interactive shell, each waiting for the prompt.

        Returns the commands' own output and the full transcript. A failed
        command stops the run only if stop is set; the exception raised then
        carries result and result_all attributes with what was gathered.
        """
        result: list[str] = []
        result_all: list[str] = []
        prompt = re.compile(self.config.reg_prompt)
        with self._spawn() as shell:
            self._expect_or_fail(shell, prompt, self.config.timeout_spawn, result, result_all)
            self._run_commands(shell, prompt, cmds, stop, result, result_all)
        return "".join(result), "".join(result_all)

    def exec_v04(
        self, su: SSHSuTo, cmds: Iterable[SSHCmd], stop: bool = False
    ) -> tuple[str, str]:
        """Switch user with su, then run commands as exec_v03 does."""
        result: list[str] = []
        result_all: list[str] = []
        prompt = re.compile(self.config.reg_prompt)
        password_prompt = re.compile(self.config.reg_password)
        with self._spawn() as shell:
            self._expect_or_fail(shell, prompt, self.config.timeout_spawn, result, result_all)
            # LANG=en keeps the password prompt in English.
            self._send_or_fail(shell, f"LANG=en su - {su.username}\n", result, result_all)
            if su.expect_password:
                self._expect_or_fail(shell, password_prompt, su.timeout, result, result_all)
                self._send_or_fail(shell, su.password + "\n", result, result_all)
            self._expect_or_fail(shell, prompt, su.timeout, result, result_all)
            self._run_commands(shell, prompt, cmds, stop, result, result_all)
        return "".join(result), "".join(result_all)