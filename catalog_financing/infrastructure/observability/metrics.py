"""Prometheus metrics for plan resolution, quoting and reference data caching"""

from prometheus_client import Counter, Histogram

from catalog_financing.domain.models import PlanResolution

# Resolution metrics
plan_resolution_counter = Counter(
    "catalog_plan_resolution_total",
    "Plan resolutions by winning tier",
    ["item_kind", "tier"],  # especiales | default | ninguno
)

offers_per_item_histogram = Histogram(
    "catalog_offers_per_item",
    "Number of financing offers shown for an item",
    buckets=[0, 1, 2, 3, 4, 6, 8, 12],
)

association_lookup_failures_counter = Counter(
    "catalog_association_lookup_failures_total",
    "Association tables that could not be read",
    ["tier"],
)

# Quote metrics
quote_counter = Counter(
    "catalog_quote_total",
    "Single-plan quotes requested",
    ["outcome"],  # quoted | out_of_band | plan_not_found
)

# Reference cache
cache_hit_counter = Counter(
    "catalog_reference_cache_hits_total",
    "Reference cache hits",
    ["cache"],
)

cache_miss_counter = Counter(
    "catalog_reference_cache_misses_total",
    "Reference cache misses (loads)",
    ["cache"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_resolution(item_kind: str, resolution: PlanResolution, offer_count: int) -> None:
    """Record which tier won and how many offers survived eligibility"""
    plan_resolution_counter.labels(item_kind=item_kind, tier=resolution.tier).inc()
    offers_per_item_histogram.observe(offer_count)
