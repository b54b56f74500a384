# wclkit

A collection of small, independent helpers for everyday Python programs:
collections, strings and numbers, JSON, IP and port handling, files,
HTTP(S) clients and a TLS server, client-certificate checks, a levelled
logger, image cropping and hashing, FTP and SSH.

Each module stands on its own; import only what you need.

## Installation

```
pip install wclkit
```

Requires Python 3.10 or later. The package depends on `requests`
(HTTP clients), `pillow` (images) and `paramiko` (SSH).

To run the test suite:

```
pip install "wclkit[test]"
pytest
```

## Modules

| Module | What it offers |
| --- | --- |
| `wclkit.sets` | `Set` with chainable `insert`/`delete`/`clear`, `has`, `has_all`, `has_any`, `union`, `intersection`, `difference`, `symmetric_difference`, `is_superset`, `equal`, `pop_any`; `key_set(mapping)` and `sorted_list(s)` |
| `wclkit.stack` | `Stack` with `push`, `pop` (raises `IndexError` when empty), `top`, `swap`, `get`, `set`, `is_empty`, `dump` |
| `wclkit.slices` | `copy_strings`, `sort_strings` (in place), `contains_string` and `remove_string`, both with an optional modifier function |
| `wclkit.strutil` | `get_substring` (raises `ValueError` on bad bounds), `compare_string_map`, `string_list_has`, `template_escape` for HTML-special characters |
| `wclkit.mathutil` | `abs_int` |
| `wclkit.num` | Lenient parsing that returns zero on bad input: `parse_float64`, `parse_int64`, `parse_int` (32-bit range) |
| `wclkit.buffers` | `SingleWriter`, an in-memory byte buffer whose writes are guarded by a lock |
| `wclkit.uuidgen` | `new_uuid()` (random UUID4 text) and `new_date_id()` (32 digits: local time `YYYYmmddHHMMSS` then random digits) |
| `wclkit.aggregate` | `AggregateError` grouping several exceptions, `new_aggregate`, `filter_out`, `flatten`, `reduce_error`, `create_aggregate_from_message_count_map`, `aggregate_concurrently`; `PreconditionViolatedError` |
| `wclkit.procfs` | `get_pids(pattern)`, `pid_of(name)` and `pkill(name, sig)` by reading `/proc` |
| `wclkit.jsonutil` | `unescape`, `indent`/`indent_string` pretty printing, `split`/`split_string` of a JSON array into compact elements, `format_single_line`, `split_objects` |
| `wclkit.ipnet` | `parse_cidrs`, `parse_port`, `big_for_ip`, `add_ip_offset`, `range_size`, `get_indexed_ip` |
| `wclkit.portrange` | `PortRange` (`contains`, `str()`, `PortRange.parse`) and `parse_port_range` for `"80"`, `"8000-8080"` and `"8000+10"` |
| `wclkit.netflags` | `validate_ip`, `validate_ip_port`, `validate_port_range` for option values |
| `wclkit.netutil` | `get_host_ip`, `get_host_ip_v2`, `get_tcp_source_ip`, `get_available_port`, `get_ip_from_request`, path and query-string helpers, `get_schema_and_host`, `get_full_url` |
| `wclkit.proxy` | `copy_header` (canonicalises header names) and `get_request_string` rendering a request as HTTP/1.1 text |
| `wclkit.tcp` | `listen(addr)` and `dial(addr)` returning sockets for `"host:port"` strings |
| `wclkit.ftpclient` | `FTPClient` with `read_file(path)` and `write_file(path, reader)`; each call opens its own session |
| `wclkit.fsutil` | Existence checks, `ensure_directory`, `write_file`, `write_fullpath_file`, `copy_file`, `compare_file`, `compare_file_and_content`, sizes and URL-safe base64 SHA-256 hashes, executable directory and name |
| `wclkit.httpclient` | `HttpClient` for GET/POST with a timeout (0 means 10 seconds) and an optional response size limit |
| `wclkit.httpsclient` | `HttpsClient` with CA verification, optional client certificate or `skip_verify`; `HttpsServer` serving a `BaseHTTPRequestHandler` over TLS, requiring client certificates when `ca_crt_file` is set |
| `wclkit.mutualtls` | Checks on certificates in `ssl.SSLSocket.getpeercert()` form: `check_client_cert_exist`, `check_client_cert_ip`, `get_client_cert_common_name`, `get_client_cert_ip_set`, `parse_client_ip`; failures raise `ClientCertError` |
| `wclkit.logger` | `LogLevel`, `Logger`, `PrefixedLogger`, `WriterHandler`, `LogRecord` and `new_logger` |
| `wclkit.imageutil` | `get_image_type` (content sniffing), `get_image`, `get_image_and_type`, `get_image_size`, `crop_image_height`, `crop_image_width`, `write_image_png`, `get_image_hash` |
| `wclkit.sshclient` | `SSH` with `exec_v01` (one command), `exec_v02` (commands fed to a shell), `exec_v03` (interactive, waits for the prompt) and `exec_v04` (after `su`); `SSHConfig`, `SSHCmd`, `SSHSuTo` |
| `wclkit.htmltable` | `Table` with `add_row`, `size`, `compute_column_width`, `to_html` |

## Examples

Sets:

```python
from wclkit.sets import Set, sorted_list

s = Set("z", "y", "x", "a")
s.insert("b")
print(sorted_list(s))            # ['a', 'b', 'x', 'y', 'z']
print(s.has_any("q", "a"))       # True
```

Port ranges:

```python
from wclkit.portrange import parse_port_range

pr = parse_port_range("8000+10")
print(str(pr))                   # 8000-8010
print(pr.contains(8005))         # True
```

Splitting a JSON array:

```python
from wclkit.jsonutil import split_string

print(split_string('[{"b": 1, "a": 2}, [1, 2]]'))
# ['{"a":2,"b":1}', '[1,2]']
```

Logging with prefixes:

```python
from wclkit.logger import LogLevel, new_logger

log = new_logger("app", LogLevel.INFO)
log.info("started on port %d", 8080)
log.new("user", "alice").warning("quota nearly reached")
# ... [app] WARNING  [user=alice] quota nearly reached
```

`Logger.fatal` logs at CRITICAL, closes the handler and raises
`SystemExit(1)`; `Logger.panic` logs and raises `RuntimeError`.

HTML tables:

```python
from wclkit.htmltable import Table

t = Table(title="Servers", head=["name", "ip"])
t.add_row(["web", "10.0.0.1"])
print(t.to_html(False))
```

Client address behind a proxy:

```python
from wclkit.netutil import get_ip_from_request

ip = get_ip_from_request("10.0.0.5:51234", {"X-Forwarded-For": "203.0.113.7"})
print(ip)                        # 203.0.113.7
```

## Errors

Failures are raised as exceptions: `ValueError` for malformed input
(CIDRs, ports, port ranges, substrings, unsupported images or HTTP
methods), `OSError` and its subclasses for file and network problems,
`ProcessLookupError` from `pkill` when nothing matches, `AggregateError`
when several signals fail, and `ClientCertError` from the certificate
checks. The parsers in `wclkit.num` are the exception to this: they
return zero instead.

## What this package does not do

- It is a library only; it installs no command-line program.
- `HttpsServer` only wraps Python's `http.server` in TLS; it has no
  routing or request handling of its own, so you supply the handler class.
- `wclkit.procfs` works only where `/proc` exists (Linux).
- `SSH` authenticates with a password and does not verify host keys.