"""Identifier generators."""

from __future__ import annotations

import random
import time
import uuid
from datetime import datetime

_ID_LENGTH = 32


def new_uuid() -> str:
    """Return a random version-4 UUID in its canonical text form."""
    return str(uuid.uuid4())


def new_date_id() -> str:
    """Return a 32-digit id: local time as YYYYmmddHHMMSS followed by random digits."""
    now_ns = time.time_ns()
    timestr = datetime.fromtimestamp(now_ns / 1e9).strftime("%Y%m%d%H%M%S")
    generator = random.Random(now_ns)
    randstr = "0" * _ID_LENGTH + str(generator.randrange(1000000)) + str(
        generator.randrange(1000000)
    )
    return timestr + randstr[len(randstr) - (_ID_LENGTH - len(timestr)):]