import ftplib
import io
from unittest import mock

import pytest

from wclkit.ftpclient import FTPClient


@pytest.fixture
def fake_ftp():
    with mock.patch("ftplib.FTP") as ftp_cls:
        session = ftp_cls.return_value
        session.__enter__.return_value = session
        session.__exit__.return_value = False
        yield session


def make_client():
    password = "password"
    return FTPClient(ip="127.0.0.1", port="2121", username="user", password=password)


def test_read_file_joins_chunks(fake_ftp):
    def retr(command, callback):
        callback(b"abc")
        callback(b"def")

    fake_ftp.retrbinary.side_effect = retr
    data = make_client().read_file("/pub/a.txt")
    assert data == b"abcdef"
    assert fake_ftp.retrbinary.call_args[0][0] == "RETR /pub/a.txt"
    assert fake_ftp.connect.call_args == mock.call("127.0.0.1", 2121)
    assert fake_ftp.login.call_args == mock.call("user", "password")


def test_write_file_stores_reader(fake_ftp):
    payload = io.BytesIO(b"payload")
    make_client().write_file("/up/b.bin", payload)
    assert fake_ftp.storbinary.call_args == mock.call("STOR /up/b.bin", payload)


def test_login_failure_propagates(fake_ftp):
    fake_ftp.login.side_effect = ftplib.error_perm("530 Login incorrect")
    with pytest.raises(ftplib.error_perm):
        make_client().read_file("/pub/a.txt")
    assert fake_ftp.retrbinary.call_count == 0


def test_invalid_port(fake_ftp):
    client = FTPClient(ip="127.0.0.1", port="abc")
    with pytest.raises(ValueError):
        client.read_file("/x")
    assert fake_ftp.connect.call_count == 0