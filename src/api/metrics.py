from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "todo_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "todo_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TODOS_GENERATED_TOTAL = get_or_create_metric(
    "todo_generated_total", "Todos generated from natural language", Counter
)

ANALYSES_TOTAL = get_or_create_metric(
    "todo_analyses_total", "Todo analyses produced", Counter, labelnames=["period"]
)

AI_FAILURES_TOTAL = get_or_create_metric(
    "todo_ai_failures_total",
    "Classified AI failures",
    Counter,
    labelnames=["kind"],
)


def observe_request(endpoint: str, status: str, started_at: float, finished_at: float) -> None:
    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(finished_at - started_at)
    except Exception:
        pass
