#!/usr/bin/env python3
"""
Test script for Header Guardian
"""
import io
import ipaddress
import json
import os
import socket
import ssl
import sys
import tempfile
import threading
import time
from contextlib import contextmanager, redirect_stdout
from datetime import datetime, timedelta, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

# Add src and repository root to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))
sys.path.insert(0, str(Path(__file__).parent))

from analyzer import (
    SECURITY_HEADERS, HeaderAnalyzer, HeaderSpec, Tier, is_header_present, score_to_grade,
)
from fetcher import FetchError, HeaderFetcher, normalize_url
from guardian import HeaderGuardian
from settings import load_config

ALL_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'self'",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=()",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}

CRITICAL_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
}


# ----------------------------------------------------------------------
# Local test servers
# ----------------------------------------------------------------------

class _HeaderHandler(BaseHTTPRequestHandler):
    status = 200
    response_headers = {}
    delay = 0
    requests_seen = None

    def do_GET(self):
        self.requests_seen.append(self.path)
        if self.delay:
            time.sleep(self.delay)
        self.send_response(self.status)
        for name, value in self.response_headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


@contextmanager
def serve(status=200, headers=None, delay=0, tls_context=None):
    """Run a one-off HTTP(S) server on 127.0.0.1 and yield (base_url, requests_seen)"""
    seen = []
    handler = type("Handler", (_HeaderHandler,), {
        "status": status,
        "response_headers": headers or {},
        "delay": delay,
        "requests_seen": seen,
    })
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    scheme = "http"
    if tls_context is not None:
        server.socket = tls_context.wrap_socket(server.socket, server_side=True)
        scheme = "https"

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"{scheme}://127.0.0.1:{server.server_address[1]}", seen
    finally:
        server.shutdown()
        server.server_close()


def self_signed_context(tmpdir: str) -> ssl.SSLContext:
    """Server TLS context with a freshly generated self-signed certificate"""
    from cryptography import x509
    from cryptography.hazmat.primitives import hashes, serialization
    from cryptography.hazmat.primitives.asymmetric import ec
    from cryptography.x509.oid import NameOID

    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(
            x509.SubjectAlternativeName([x509.IPAddress(ipaddress.ip_address("127.0.0.1"))]),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )

    cert_path = os.path.join(tmpdir, "cert.pem")
    key_path = os.path.join(tmpdir, "key.pem")
    with open(cert_path, "wb") as f:
        f.write(cert.public_bytes(serialization.Encoding.PEM))
    with open(key_path, "wb") as f:
        f.write(key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        ))

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(cert_path, key_path)
    return context


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@contextmanager
def raw_server(lines, interval=0.0):
    """Answer one request with hand-written response lines, pausing *interval* seconds after each"""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)

    def respond():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            try:
                conn.recv(65536)
                for line in lines:
                    conn.sendall(line.encode("latin-1") + b"\r\n")
                    if interval:
                        time.sleep(interval)
                conn.sendall(b"\r\n")
            except OSError:
                pass

    thread = threading.Thread(target=respond, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{listener.getsockname()[1]}"
    finally:
        listener.close()


class StubFetcher:
    """Fetcher returning canned headers, or raising FetchError"""

    def __init__(self, headers=None, error=None):
        self.headers = headers or {}
        self.error = error
        self.urls = []

    def fetch(self, url):
        self.urls.append(url)
        if self.error:
            raise FetchError(url, self.error)
        return dict(self.headers)


# ----------------------------------------------------------------------
# URL normalization
# ----------------------------------------------------------------------

def test_normalize_url():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("http://example.com") == "http://example.com"
    assert normalize_url("https://example.com/path?q=1") == "https://example.com/path?q=1"
    # Prefix check is literal and case-sensitive
    assert normalize_url("HTTP://example.com") == "https://HTTP://example.com"
    assert normalize_url("") == "https://"


# ----------------------------------------------------------------------
# Catalog and presence
# ----------------------------------------------------------------------

def test_catalog():
    assert len(SECURITY_HEADERS) == 8
    assert sum(spec.weight for spec in SECURITY_HEADERS) == 110
    tiers = [spec.tier for spec in SECURITY_HEADERS]
    assert tiers.count(Tier.CRITICAL) == 3
    assert tiers.count(Tier.IMPORTANT) == 2
    assert tiers.count(Tier.RECOMMENDED) == 3


def test_presence_is_case_insensitive():
    hsts = SECURITY_HEADERS[0]
    assert is_header_present({"strict-transport-security": "max-age=1"}, hsts)
    assert is_header_present({"Strict-Transport-Security": "max-age=1"}, hsts)
    assert is_header_present({"STRICT-TRANSPORT-SECURITY": "max-age=1"}, hsts)

    lower = HeaderAnalyzer().analyze({"strict-transport-security": "max-age=1"}, "https://a")
    canonical = HeaderAnalyzer().analyze({"Strict-Transport-Security": "max-age=1"}, "https://a")
    assert lower == canonical


def test_alias_marks_canonical_present():
    result = HeaderAnalyzer().analyze(
        {"Content-Security-Policy-Report-Only": "default-src 'self'"}, "https://example.com"
    )
    assert result.headers["Content-Security-Policy"] is True
    assert "Content-Security-Policy-Report-Only" not in result.headers

    result = HeaderAnalyzer().analyze({"feature-policy": "camera 'none'"}, "https://example.com")
    assert result.headers["Permissions-Policy"] is True


def test_empty_value_counts_as_absent():
    hsts = SECURITY_HEADERS[0]
    assert not is_header_present({"Strict-Transport-Security": ""}, hsts)
    assert not is_header_present({}, hsts)

    csp = SECURITY_HEADERS[3]
    assert not is_header_present(
        {"Content-Security-Policy": "", "Content-Security-Policy-Report-Only": ""}, csp
    )
    assert is_header_present(
        {"Content-Security-Policy": "", "Content-Security-Policy-Report-Only": "default-src *"}, csp
    )


# ----------------------------------------------------------------------
# Scoring
# ----------------------------------------------------------------------

def test_all_headers_https():
    result = HeaderAnalyzer().analyze(ALL_HEADERS, "https://example.com")
    # 70 + 30 + 10 + 5 capped at 100
    assert result.score == 100
    assert result.grade == "A"
    assert all(result.headers.values())


def test_no_headers_plain_http():
    result = HeaderAnalyzer().analyze({}, normalize_url("http://example.com"))
    assert result.score == 0
    assert result.grade == "F"
    assert result.url == "http://example.com"
    assert not any(result.headers.values())


def test_critical_headers_only():
    url = normalize_url("example.com")
    result = HeaderAnalyzer().analyze(CRITICAL_HEADERS, url)
    # 50 * 70 // 110 = 31, + 30 https, + 10 critical bonus
    assert url == "https://example.com"
    assert result.score == 71
    assert result.grade == "B"


def test_referrer_policy_only():
    result = HeaderAnalyzer().analyze({"Referrer-Policy": "no-referrer"}, "https://example.com")
    # 15 * 70 // 110 = 9, + 30 https, + 2 important bonus
    assert result.score == 41
    assert result.grade == "D"


def test_tier_bonus_steps():
    analyzer = HeaderAnalyzer()
    assert [analyzer._critical_bonus(n) for n in range(4)] == [0, 3, 6, 10]
    assert [analyzer._important_bonus(n) for n in range(3)] == [0, 2, 5]

    # HSTS alone over plain http: 20 * 70 // 110 = 12, + 3
    result = analyzer.analyze({"Strict-Transport-Security": "max-age=1"}, "http://example.com")
    assert result.score == 15
    assert result.grade == "F"


def test_recommended_headers_get_no_bonus():
    headers = {
        "Permissions-Policy": "geolocation=()",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
    }
    result = HeaderAnalyzer().analyze(headers, "https://example.com")
    # 25 * 70 // 110 = 15, + 30
    assert result.score == 45
    assert result.grade == "C"


def test_result_shape_and_order():
    result = HeaderAnalyzer().analyze({"X-Frame-Options": "DENY"}, "https://example.com")
    assert len(result.summary) == len(SECURITY_HEADERS)
    assert list(result.headers) == [spec.name for spec in SECURITY_HEADERS]
    assert [check.name for check in result.summary] == [spec.name for spec in SECURITY_HEADERS]

    data = result.to_dict()
    assert set(data) == {"headers", "score", "grade", "summary", "url"}
    csp = next(item for item in data["summary"] if item["name"] == "Content-Security-Policy")
    assert csp["aliases"] == ["Content-Security-Policy-Report-Only"]
    hsts = next(item for item in data["summary"] if item["name"] == "Strict-Transport-Security")
    assert "aliases" not in hsts
    xfo = next(item for item in data["summary"] if item["name"] == "X-Frame-Options")
    assert xfo == {
        "name": "X-Frame-Options",
        "present": True,
        "description": "Protects against clickjacking by controlling iframe embedding.",
        "weight": 15,
    }
    json.dumps(data)


def test_scoring_is_idempotent():
    analyzer = HeaderAnalyzer()
    first = analyzer.analyze(CRITICAL_HEADERS, "https://example.com")
    second = analyzer.analyze(CRITICAL_HEADERS, "https://example.com")
    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_score_always_in_bounds():
    analyzer = HeaderAnalyzer()
    names = [spec.name for spec in SECURITY_HEADERS]
    for mask in range(1 << len(names)):
        headers = {name: "x" for i, name in enumerate(names) if mask & (1 << i)}
        for url in ("https://example.com", "http://example.com"):
            result = analyzer.analyze(headers, url)
            assert 0 <= result.score <= 100
            assert result.grade == score_to_grade(result.score)


def test_grade_thresholds():
    for score in range(0, 101):
        if score >= 80:
            expected = "A"
        elif score >= 65:
            expected = "B"
        elif score >= 45:
            expected = "C"
        elif score >= 25:
            expected = "D"
        else:
            expected = "F"
        assert score_to_grade(score) == expected, score

    order = "FDCBA"
    grades = [order.index(score_to_grade(s)) for s in range(0, 101)]
    assert grades == sorted(grades)


def test_custom_catalog():
    catalog = (
        HeaderSpec(name="X-Only", description="Only header", weight=5, tier=Tier.CRITICAL),
    )
    result = HeaderAnalyzer(catalog).analyze({"x-only": "1"}, "https://example.com")
    # 70 + 30 + 3 capped
    assert result.score == 100
    assert list(result.headers) == ["X-Only"]


# ----------------------------------------------------------------------
# Fetcher
# ----------------------------------------------------------------------

def test_fetch_returns_headers():
    with serve(headers={"X-Frame-Options": "DENY"}) as (base_url, seen):
        headers = HeaderFetcher(timeout=5).fetch(base_url + "/")
    assert headers["x-frame-options"] == "DENY"
    assert seen == ["/"]


def test_fetch_does_not_follow_redirects():
    with serve(status=302, headers={
        "Location": "/elsewhere",
        "Strict-Transport-Security": "max-age=31536000",
    }) as (base_url, seen):
        headers = HeaderFetcher(timeout=5).fetch(base_url + "/")
    assert headers["Location"] == "/elsewhere"
    assert headers["Strict-Transport-Security"] == "max-age=31536000"
    assert seen == ["/"]


def test_fetch_follows_redirects_when_enabled():
    with serve(status=301, headers={"Location": "http://127.0.0.1:1/unused"}) as (base_url, seen):
        fetcher = HeaderFetcher(timeout=5, follow_redirects=True)
        try:
            fetcher.fetch(base_url + "/")
        except FetchError:
            pass
        else:
            raise AssertionError("redirect to a closed port should fail")
    assert seen == ["/"]


def test_fetch_connection_refused():
    url = f"http://127.0.0.1:{unused_port()}/"
    try:
        HeaderFetcher(timeout=5).fetch(url)
    except FetchError as e:
        assert e.url == url
        assert url in str(e)
        assert e.__cause__ is not None
    else:
        raise AssertionError("expected FetchError")


def test_fetch_timeout():
    with serve(delay=2) as (base_url, _):
        try:
            HeaderFetcher(timeout=0.5).fetch(base_url + "/")
        except FetchError as e:
            assert "timed out" in e.reason
        else:
            raise AssertionError("expected FetchError")


def test_fetch_slow_headers_hit_deadline():
    lines = ["HTTP/1.1 200 OK"] + [f"X-Filler-{i}: {i}" for i in range(12)]
    with raw_server(lines, interval=0.3) as base_url:
        start = time.monotonic()
        try:
            HeaderFetcher(timeout=1).fetch(base_url + "/")
        except FetchError as e:
            assert "timed out" in e.reason
        else:
            raise AssertionError("expected FetchError")
        elapsed = time.monotonic() - start
    # Each header line arrives well within the timeout; only the overall deadline stops it
    assert elapsed < 2.0, elapsed


def test_fetch_malformed_host():
    for url in ("a..com", "http://a..com/", "http://" + "a" * 64 + ".com/"):
        try:
            HeaderGuardian(fetcher=HeaderFetcher(timeout=3)).analyze_url(url)
        except FetchError as e:
            assert e.url == normalize_url(url)
        else:
            raise AssertionError(f"expected FetchError for {url}")


def test_repeated_header_uses_first_value():
    lines = [
        "HTTP/1.1 200 OK",
        "Content-Length: 0",
        "Connection: close",
        "X-Frame-Options:",
        "X-Frame-Options: DENY",
        "Referrer-Policy: no-referrer",
        "Referrer-Policy: origin",
    ]
    with raw_server(lines) as base_url:
        headers = HeaderFetcher(timeout=5).fetch(base_url + "/")
    assert headers["x-frame-options"] == ""
    assert headers["Referrer-Policy"] == "no-referrer"

    result = HeaderAnalyzer().analyze(headers, "http://example.com")
    assert result.headers["X-Frame-Options"] is False
    assert result.headers["Referrer-Policy"] is True


def test_fetch_self_signed_certificate():
    with tempfile.TemporaryDirectory() as tmpdir:
        context = self_signed_context(tmpdir)
        with serve(headers={"X-Content-Type-Options": "nosniff"}, tls_context=context) as (base_url, _):
            headers = HeaderFetcher(timeout=5).fetch(base_url + "/")
            assert headers["X-Content-Type-Options"] == "nosniff"

            try:
                HeaderFetcher(timeout=5, verify_tls=True).fetch(base_url + "/")
            except FetchError as e:
                assert "TLS" in e.reason
            else:
                raise AssertionError("self-signed certificate should fail verification")


# ----------------------------------------------------------------------
# Guardian, configuration, CLI
# ----------------------------------------------------------------------

def test_guardian_normalizes_and_scores():
    fetcher = StubFetcher(CRITICAL_HEADERS)
    result = HeaderGuardian(fetcher=fetcher).analyze_url("example.com")
    assert fetcher.urls == ["https://example.com"]
    assert result.url == "https://example.com"
    assert result.score == 71
    assert result.grade == "B"


def test_guardian_propagates_fetch_error():
    guardian = HeaderGuardian(fetcher=StubFetcher(error="no such host"))
    try:
        guardian.analyze_url("unreachable.invalid")
    except FetchError as e:
        assert "no such host" in str(e)
    else:
        raise AssertionError("expected FetchError")


def test_guardian_against_local_server():
    with serve() as (base_url, _):
        result = HeaderGuardian(fetcher=HeaderFetcher(timeout=5)).analyze_url(base_url + "/")
    assert result.url.startswith("http://")
    assert result.score == 0
    assert result.grade == "F"


def test_load_config():
    config = load_config()
    assert config['fetcher']['timeout_seconds'] == 10
    assert config['fetcher']['verify_tls'] is False
    assert config['fetcher']['follow_redirects'] is False

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "config.yaml")
        with open(path, "w") as f:
            f.write("fetcher:\n  timeout_seconds: 3\n")
        config = load_config(path)
        assert config['fetcher']['timeout_seconds'] == 3
        assert config['fetcher']['user_agent'] == "HeaderGuardian/1.0"

        config = load_config(os.path.join(tmpdir, "missing.yaml"))
        assert config['server']['host'] == "0.0.0.0"

    guardian = HeaderGuardian.from_config({"fetcher": {"timeout_seconds": 4, "verify_tls": True}})
    assert guardian.fetcher.timeout == 4
    assert guardian.fetcher.verify_tls is True
    assert guardian.fetcher.follow_redirects is False


def test_cli_json_output():
    from main import main as cli_main

    with serve(headers={"Referrer-Policy": "no-referrer"}) as (base_url, _):
        out = io.StringIO()
        with redirect_stdout(out):
            exit_code = cli_main(["--json", base_url + "/"])
    assert exit_code == 0
    data = json.loads(out.getvalue())
    # 15 * 70 // 110 = 9, no https, + 2 important bonus
    assert data["score"] == 11
    assert data["grade"] == "F"
    assert data["headers"]["Referrer-Policy"] is True


def test_cli_fetch_failure_exit_code():
    from main import main as cli_main

    out = io.StringIO()
    with redirect_stdout(out):
        exit_code = cli_main([f"http://127.0.0.1:{unused_port()}/"])
    assert exit_code == 1
    assert out.getvalue() == ""


def test_cli_malformed_host_exit_code():
    from main import main as cli_main

    out = io.StringIO()
    with redirect_stdout(out):
        exit_code = cli_main(["a..com"])
    assert exit_code == 1


# ----------------------------------------------------------------------
# HTTP API
# ----------------------------------------------------------------------

def test_api():
    from fastapi.testclient import TestClient
    from backend import api

    with TestClient(api.app) as client:
        api.guardian = HeaderGuardian(fetcher=StubFetcher(ALL_HEADERS))

        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

        response = client.post("/analyze", json={"url": "example.com"})
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 100
        assert data["grade"] == "A"
        assert data["url"] == "https://example.com"
        assert len(data["summary"]) == 8

        response = client.post("/analyze", json={"url": ""})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

        response = client.post("/analyze", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

        response = client.post("/analyze", json={"url": None})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

        response = client.post(
            "/analyze", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

        api.guardian = HeaderGuardian(fetcher=StubFetcher(error="connection refused"))
        response = client.post("/analyze", json={"url": "http://down.example"})
        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to analyze URL: ")
        assert "connection refused" in response.json()["error"]

        response = client.options("/analyze", headers={
            "Origin": "http://frontend.example",
            "Access-Control-Request-Method": "POST",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

        response = client.get("/metrics")
        assert response.status_code == 200
        assert "header_guardian_analyses_total" in response.text
        assert "header_guardian_fetch_failures_total" in response.text


def test_api_metrics_label_by_route():
    from fastapi.testclient import TestClient
    from backend import api

    with TestClient(api.app) as client:
        api.guardian = HeaderGuardian(fetcher=StubFetcher(CRITICAL_HEADERS))

        client.post("/analyze", json={"url": "example.com"})
        for path in ("/wp-login.php", "/scan-1", "/scan-2/deeper"):
            assert client.get(path).status_code == 404

        text = client.get("/metrics").text
    assert 'endpoint="/analyze"' in text
    assert 'endpoint="unmatched"' in text
    assert "/wp-login.php" not in text
    assert "/scan-1" not in text


TESTS = [
    ("URL normalization", test_normalize_url),
    ("Catalog", test_catalog),
    ("Case-insensitive presence", test_presence_is_case_insensitive),
    ("Alias presence", test_alias_marks_canonical_present),
    ("Empty header value", test_empty_value_counts_as_absent),
    ("All headers over HTTPS", test_all_headers_https),
    ("No headers over HTTP", test_no_headers_plain_http),
    ("Critical headers only", test_critical_headers_only),
    ("Referrer-Policy only", test_referrer_policy_only),
    ("Tier bonus steps", test_tier_bonus_steps),
    ("Recommended headers", test_recommended_headers_get_no_bonus),
    ("Result shape", test_result_shape_and_order),
    ("Idempotent scoring", test_scoring_is_idempotent),
    ("Score bounds", test_score_always_in_bounds),
    ("Grade thresholds", test_grade_thresholds),
    ("Custom catalog", test_custom_catalog),
    ("Fetch headers", test_fetch_returns_headers),
    ("No redirect following", test_fetch_does_not_follow_redirects),
    ("Redirect following", test_fetch_follows_redirects_when_enabled),
    ("Connection refused", test_fetch_connection_refused),
    ("Fetch timeout", test_fetch_timeout),
    ("Slow headers deadline", test_fetch_slow_headers_hit_deadline),
    ("Malformed host", test_fetch_malformed_host),
    ("Repeated header", test_repeated_header_uses_first_value),
    ("Self-signed TLS", test_fetch_self_signed_certificate),
    ("Guardian", test_guardian_normalizes_and_scores),
    ("Guardian fetch error", test_guardian_propagates_fetch_error),
    ("Guardian local server", test_guardian_against_local_server),
    ("Configuration", test_load_config),
    ("CLI JSON", test_cli_json_output),
    ("CLI failure", test_cli_fetch_failure_exit_code),
    ("CLI malformed host", test_cli_malformed_host_exit_code),
    ("HTTP API", test_api),
    ("API metric labels", test_api_metrics_label_by_route),
]


def main():
    """Run all tests"""
    print("=" * 60)
    print("Header Guardian - Test Suite")
    print("=" * 60)

    results = []
    for name, test in TESTS:
        try:
            test()
            results.append((name, True))
        except Exception as e:
            print(f"  ❌ {name}: {e!r}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("Test Summary")
    print("=" * 60)

    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{name:28} {status}")

    all_passed = all(passed for _, passed in results)

    print("\n" + "=" * 60)
    if all_passed:
        print("✅ All tests passed!")
        return 0
    print("❌ Some tests failed.")
    return 1


if __name__ == '__main__':
    sys.exit(main())
