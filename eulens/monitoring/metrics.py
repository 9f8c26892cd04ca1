"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram

chat_requests_total = Counter("eulens_chat_requests_total",
                              "Total number of chat requests reaching the query pipeline")
chat_errors_total = Counter(
    "eulens_chat_errors_total", "Total number of failed chat requests")
chat_latency_seconds = Histogram(
    "eulens_chat_latency_seconds", "Chat request latency in seconds", buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0])

ingested_chunks_total = Counter("eulens_ingested_chunks_total",
                                "Total number of chunks upserted into the vector index")
failed_chunks_total = Counter(
    "eulens_failed_chunks_total", "Total number of chunks skipped during ingestion")
ingestion_duration_seconds = Histogram(
    "eulens_ingestion_duration_seconds", "Document ingestion duration", buckets=[1.0, 5.0, 10.0, 30.0, 60.0, 300.0])
