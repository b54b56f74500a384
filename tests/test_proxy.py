from wclkit.proxy import copy_header, get_request_string


def test_copy_header_replaces_and_canonicalises():
    dst = {"Old": ["x"]}
    src = {"content-type": ["text/plain"], "X-A": ["1", "2"]}
    copy_header(dst, src)
    assert dst == {"Content-Type": ["text/plain"], "X-A": ["1", "2"]}


def test_copy_header_merges_same_canonical_name():
    dst = {}
    copy_header(dst, {"x-id": "a", "X-ID": ["b"]})
    assert sorted(dst["X-Id"]) == ["a", "b"]
    assert len(dst) == 1


def test_request_string_sorts_query():
    text = get_request_string("GET", "/p", "b=2&a=1", {"Host": ["example.com"]}, b"body")
    assert text == "GET /p?a=1&b=2 HTTP/1.1\r\nHost: example.com\r\n\r\nbody"


def test_request_string_without_query_or_body():
    text = get_request_string("POST", "/submit", "", {}, None)
    assert text.startswith("POST /submit HTTP/1.1\r\n")
    assert text.endswith("\r\n\r\n")
    assert "?" not in text


def test_request_string_reencodes_query():
    text = get_request_string("GET", "/s", "q=a b", {}, "")
    assert text.splitlines()[0] == "GET /s?q=a+b HTTP/1.1"


def test_request_string_repeats_header_values():
    text = get_request_string("GET", "/", "", {"X-A": ["1", "2"]}, "")
    assert text.count("X-A: ") == 2