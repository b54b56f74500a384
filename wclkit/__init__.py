"""Everyday helpers: sets, stacks, strings, numbers, JSON, IP and port handling, files, HTTP(S), TLS client checks, logging, images, FTP and SSH."""

__version__ = "0.1.0"