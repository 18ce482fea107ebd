"""HTTP latency benchmark for the SNS API read endpoints.

Logs in as a seeded user (see ``scripts/seed.py``) and replays each
endpoint, reporting latency percentiles and the ``X-Query-Count`` header.
"""
import asyncio
import argparse
import statistics
import time

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"

ENDPOINTS = [
    ("GET /api/v1/posts", "/api/v1/posts"),
    ("GET /api/v1/posts?page=1&size=50", "/api/v1/posts?page=1&size=50"),
    ("GET /api/v1/posts/my", "/api/v1/posts/my"),
    ("GET /api/v1/posts/1/likes", "/api/v1/posts/1/likes"),
    ("GET /api/v1/posts/1/comments", "/api/v1/posts/1/comments"),
    ("GET /api/v1/users/notifications", "/api/v1/users/notifications"),
    ("GET /api/v1/metrics", "/api/v1/metrics"),
    ("GET /health", "/health"),
]


def _percentile(samples: list[float], fraction: float) -> float:
    ordered = sorted(samples)
    return round(ordered[min(int(len(ordered) * fraction), len(ordered) - 1)], 2)


async def benchmark_endpoint(client: httpx.AsyncClient, name: str, path: str, iterations: int = 50):
    times = []
    query_counts = []
    errors = 0

    # Warmup
    for _ in range(3):
        await client.get(path)

    for _ in range(iterations):
        start = time.perf_counter()
        try:
            resp = await client.get(path)
        except httpx.HTTPError:
            errors += 1
            continue
        elapsed = (time.perf_counter() - start) * 1000

        if resp.status_code != 200:
            errors += 1
            continue
        times.append(elapsed)
        if "X-Query-Count" in resp.headers:
            query_counts.append(int(resp.headers["X-Query-Count"]))

    if not times:
        return {"name": name, "error": f"All {iterations} requests failed"}

    return {
        "name": name,
        "avg_ms": round(statistics.mean(times), 2),
        "p50_ms": _percentile(times, 0.50),
        "p95_ms": _percentile(times, 0.95),
        "p99_ms": _percentile(times, 0.99),
        "queries": round(statistics.mean(query_counts), 1) if query_counts else "N/A",
        "errors": errors,
    }


async def run_benchmark(base_url: str, username: str, password: str, iterations: int = 50):
    print("=" * 80)
    print(f"SNS API Benchmark - {iterations} iterations per endpoint")
    print(f"Target: {base_url}")
    print("=" * 80)

    async with httpx.AsyncClient(base_url=base_url) as client:
        try:
            resp = await client.post(
                "/api/v1/users/login", json={"username": username, "password": password}
            )
        except httpx.HTTPError as exc:
            print(f"ERROR: Cannot connect to {base_url}: {exc}")
            return
        if resp.status_code != 200:
            print(f"ERROR: Login as {username} failed ({resp.status_code}); run scripts/seed.py first")
            return
        client.headers["Authorization"] = f"Bearer {resp.json()['token']}"

        print()
        print(f"{'Endpoint':<40} {'Avg':>8} {'P50':>8} {'P95':>8} {'P99':>8} {'Queries':>8} {'Err':>4}")
        print("-" * 80)

        for name, path in ENDPOINTS:
            result = await benchmark_endpoint(client, name, path, iterations)
            if "error" in result:
                print(f"{result['name']:<40} {'ERROR':>8}")
                continue
            print(
                f"{result['name']:<40} "
                f"{result['avg_ms']:>7.1f}ms "
                f"{result['p50_ms']:>7.1f}ms "
                f"{result['p95_ms']:>7.1f}ms "
                f"{result['p99_ms']:>7.1f}ms "
                f"{str(result['queries']):>8} "
                f"{result['errors']:>4}"
            )

        print("-" * 80)
        print("\nBenchmark complete.")


def main():
    parser = argparse.ArgumentParser(description="Benchmark the SNS API")
    parser.add_argument("-n", "--iterations", type=int, default=50, help="Iterations per endpoint")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument("--username", default="user_0000", help="Seeded user to log in as")
    parser.add_argument("--password", default="password", help="Password of the seeded user")
    args = parser.parse_args()
    asyncio.run(run_benchmark(args.base_url, args.username, args.password, args.iterations))


if __name__ == "__main__":
    main()
