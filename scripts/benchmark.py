"""Load test for the chat endpoint: latency and how often answers cite sources."""

import argparse
import asyncio
import json
import statistics
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from eulens.models.chat import ChatResponse

QUESTIONS = [
    "What is GDPR?",
    "What are the lawful bases for processing personal data?",
    "When must a data breach be notified?",
    "Who is a data protection officer?",
    "What rights does a data subject have?",
]


@dataclass
class QueryResult:
    """Outcome of one chat request."""

    question: str
    latency_seconds: float
    answer: Optional[ChatResponse] = None
    error: Optional[str] = None


@dataclass
class QuestionStats:
    latencies: List[float] = field(default_factory=list)
    cited: List[int] = field(default_factory=list)
    errors: int = 0


async def ask(client: httpx.AsyncClient, semaphore: asyncio.Semaphore, question: str) -> QueryResult:
    async with semaphore:
        start = time.perf_counter()
        try:
            response = await client.post("/api/chat", json={"message": question})
        except httpx.HTTPError as e:
            return QueryResult(question, time.perf_counter() - start, error=str(e))
        latency = time.perf_counter() - start

    if response.status_code != 200:
        return QueryResult(question, latency, error=f"HTTP {response.status_code}: {response.text}")
    try:
        return QueryResult(question, latency, answer=ChatResponse.model_validate(response.json()))
    except ValidationError as e:
        return QueryResult(question, latency, error=f"Unexpected response body: {e}")


def _percentile(values: List[float], n: int) -> float:
    if len(values) < 2:
        return values[0] if values else 0.0
    return statistics.quantiles(values, n=100, method="inclusive")[n - 1]


def summarize(results: List[QueryResult], total_time: float) -> Dict:
    """
    Aggregate per-request results into a report.

    Args:
        results: One result per request sent.
        total_time: Wall-clock duration of the run in seconds.

    Returns:
        Overall latency percentiles, citation rates and a per-question breakdown.
    """
    answered = [r for r in results if r.answer is not None]
    latencies = [r.latency_seconds for r in answered]
    relevances = [s.relevance for r in answered for s in r.answer.sources]

    per_question: Dict[str, QuestionStats] = {}
    for result in results:
        stats = per_question.setdefault(result.question, QuestionStats())
        if result.answer is None:
            stats.errors += 1
            continue
        stats.latencies.append(result.latency_seconds)
        stats.cited.append(len(result.answer.sources))

    return {
        "total_queries": len(results),
        "successful": len(answered),
        "errors": len(results) - len(answered),
        "total_time_seconds": round(total_time, 3),
        "queries_per_second": round(len(results) / total_time, 2) if total_time > 0 else 0,
        "median_latency_seconds": round(statistics.median(latencies), 3) if latencies else 0,
        "p95_latency_seconds": round(_percentile(latencies, 95), 3),
        "answers_with_sources": sum(1 for r in answered if r.answer.sources),
        "mean_relevance": round(statistics.mean(relevances), 3) if relevances else None,
        "questions": {
            question: {
                "answered": len(stats.latencies),
                "errors": stats.errors,
                "median_latency_seconds": round(statistics.median(stats.latencies), 3) if stats.latencies else 0,
                "mean_sources_cited": round(statistics.mean(stats.cited), 2) if stats.cited else 0,
            }
            for question, stats in per_question.items()
        },
    }


async def benchmark_chat_service(
    base_url: str = "http://localhost:8000",
    num_queries: int = 50,
    concurrent: int = 5,
) -> Dict:
    """
    Send num_queries questions with at most `concurrent` in flight.

    Returns:
        Report built by summarize().
    """
    semaphore = asyncio.Semaphore(concurrent)
    questions = [QUESTIONS[i % len(QUESTIONS)] for i in range(num_queries)]

    start = time.perf_counter()
    async with httpx.AsyncClient(base_url=base_url, timeout=60.0) as client:
        results = await asyncio.gather(*(ask(client, semaphore, q) for q in questions))
    return summarize(list(results), time.perf_counter() - start)


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the EU-Lens chat endpoint")
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL of the chat service")
    parser.add_argument("-n", "--queries", type=int, default=50, help="Number of questions to send")
    parser.add_argument("-c", "--concurrency", type=int, default=5, help="Requests in flight at once")
    args = parser.parse_args()

    results = asyncio.run(benchmark_chat_service(args.url, args.queries, args.concurrency))
    print(json.dumps(results, indent=2))


if __name__ == "__main__":
    main()
