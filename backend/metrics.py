from prometheus_client import Counter, Histogram, Info, generate_latest, CONTENT_TYPE_LATEST


# --- Counters (analysis outcomes) ---

ANALYSES_TOTAL = Counter(
    "header_guardian_analyses_total",
    "Completed header analyses",
    ["grade"],
)
FETCH_FAILURES_TOTAL = Counter(
    "header_guardian_fetch_failures_total",
    "Analyses that failed because the target could not be fetched",
)

# --- Histogram (score distribution) ---

ANALYSIS_SCORE = Histogram(
    "header_guardian_analysis_score",
    "Security header score of completed analyses",
    buckets=(25, 45, 65, 80, 100),
)

# --- Counters (HTTP request tracking) ---

HTTP_REQUESTS_TOTAL = Counter(
    "header_guardian_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

# --- Histogram (request duration) ---

HTTP_REQUEST_DURATION = Histogram(
    "header_guardian_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# --- Info ---

APP_INFO = Info(
    "header_guardian",
    "Header Guardian application info",
)


def record_analysis(result):
    """Count a completed analysis and observe its score."""
    ANALYSES_TOTAL.labels(grade=result.grade).inc()
    ANALYSIS_SCORE.observe(result.score)


def record_fetch_failure():
    FETCH_FAILURES_TOTAL.inc()


def set_app_info(version: str, verify_tls: bool):
    """Set application info metric."""
    APP_INFO.info({"version": version, "verify_tls": str(verify_tls).lower()})


def get_metrics_output() -> bytes:
    """Generate Prometheus text format output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Return the correct content type for Prometheus."""
    return CONTENT_TYPE_LATEST
