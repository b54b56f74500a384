import threading

from wclkit.buffers import SingleWriter


def test_write_returns_length_and_accumulates():
    w = SingleWriter()
    assert w.write(b"abc") == 3
    assert w.write(b"de") == 2
    assert w.to_bytes() == b"abcde"


def test_write_string_counts_bytes():
    w = SingleWriter()
    text = "héllo"
    assert w.write_string(text) == len(text.encode("utf-8"))
    assert w.to_bytes() == text.encode("utf-8")


def test_str_round_trip():
    w = SingleWriter()
    w.write_string("hello ")
    w.write("wörld".encode("utf-8"))
    assert str(w) == "hello wörld"


def test_empty_writer():
    w = SingleWriter()
    assert w.to_bytes() == b""
    assert str(w) == ""


def test_concurrent_writes_keep_every_byte():
    w = SingleWriter()
    chunk = b"x" * 10

    def worker():
        for _ in range(100):
            w.write(chunk)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(w.to_bytes()) == 8 * 100 * len(chunk)
    assert set(w.to_bytes()) == set(chunk)