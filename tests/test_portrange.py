import pytest

from wclkit.portrange import PortRange, parse_port_range


def test_empty_value_gives_empty_range():
    pr = parse_port_range("   ")
    assert pr == PortRange(0, 0)
    assert str(pr) == ""
    assert not pr.contains(0)


def test_single_port():
    pr = parse_port_range(" 8080 ")
    assert (pr.base, pr.size) == (8080, 1)
    assert pr.contains(8080)
    assert not pr.contains(8081)


def test_hyphen_range_bounds():
    pr = PortRange.parse("100-200")
    assert str(pr) == "100-200"
    assert pr.contains(100)
    assert pr.contains(200)
    assert not pr.contains(99)
    assert not pr.contains(201)


def test_plus_notation():
    pr = parse_port_range("100+10")
    assert pr.base == 100
    assert str(pr) == "100-110"


@pytest.mark.parametrize("text", ["80", "1-65535", "30000-32767", "5+0"])
def test_string_round_trip(text):
    pr = parse_port_range(text)
    assert parse_port_range(str(pr)) == pr


def test_both_notations_rejected():
    with pytest.raises(ValueError, match="unable to parse port range"):
        parse_port_range("1-2+3")


def test_too_large():
    with pytest.raises(ValueError, match="cannot be greater than 65535"):
        parse_port_range("70000")
    with pytest.raises(ValueError, match="cannot be greater than 65535"):
        parse_port_range("65000+1000")


def test_reversed_range():
    with pytest.raises(ValueError, match="end port cannot be less than start port"):
        parse_port_range("200-100")


@pytest.mark.parametrize("text", ["abc", "-5", "10-", "+3", "1.5"])
def test_malformed(text):
    with pytest.raises(ValueError):
        parse_port_range(text)