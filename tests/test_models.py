import pytest

from latency_profiler.models import FailureKind, FailureRecord, ResponseProperties, Target


def test_target_from_url():
    target = Target.from_url("https://Example.com:8443/a/b?x=1&y=2")
    assert target.scheme == "https"
    assert target.host == "example.com"
    assert target.effective_port == 8443
    assert target.request_path == "/a/b?x=1&y=2"
    assert target.is_tls


def test_target_default_ports():
    assert Target.from_url("http://example.com").effective_port == 80
    assert Target.from_url("https://example.com").effective_port == 443


@pytest.mark.parametrize("url", ["ftp://example.com/", "example.com", "http:///nohost", "http://example.com:99999/"])
def test_target_rejects_invalid_urls(url):
    with pytest.raises(ValueError):
        Target.from_url(url)


def test_target_is_immutable():
    target = Target.from_url("http://example.com/")
    with pytest.raises(Exception):
        target.host = "other.com"


def test_response_size_is_byte_length():
    response = ResponseProperties(time_taken=0.1, status_code=200, document="hé")
    assert response.size == 3


def test_failure_record_str():
    record = FailureRecord(kind=FailureKind.TIMEOUT, detail="timed out")
    assert str(record) == "timeout: timed out"


def test_target_ipv6_literal():
    target = Target.from_url("http://[::1]:8080/x")
    assert target.host == "::1"
    assert target.host_header == "[::1]"
    assert str(target) == "http://[::1]:8080/x"


@pytest.mark.parametrize("url", ["http://a..b/", "http://" + "x" * 64 + ".com/"])
def test_target_rejects_unencodable_hosts(url):
    with pytest.raises(ValueError, match="Invalid host name"):
        Target.from_url(url)
