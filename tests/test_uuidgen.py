import uuid
from datetime import datetime

from wclkit.uuidgen import new_date_id, new_uuid


def test_new_uuid_is_canonical_v4():
    value = new_uuid()
    parsed = uuid.UUID(value)
    assert parsed.version == 4
    assert str(parsed) == value


def test_new_uuid_unique():
    values = {new_uuid() for _ in range(100)}
    assert len(values) == 100


def test_new_date_id_shape():
    value = new_date_id()
    assert len(value) == 32
    assert value.isdigit()


def test_new_date_id_starts_with_current_time():
    before = datetime.now().replace(microsecond=0)
    value = new_date_id()
    after = datetime.now()
    stamp = datetime.strptime(value[:14], "%Y%m%d%H%M%S")
    assert before <= stamp <= after