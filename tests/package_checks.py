from __future__ import annotations

import asyncio
import logging
import sys

import httpx

import retryit
from retryit.predicates import retry_on_http_status

logger: logging.Logger = logging.getLogger(__name__)

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


async def fetch_json(client: httpx.AsyncClient, path: str) -> dict:
    response = await client.get(f"{HTTPBIN_URL}{path}")
    response.raise_for_status()
    return response.json()


def check_retry() -> None:
    logger.info("Checking retry...")

    async def run() -> dict:
        async with httpx.AsyncClient() as client:
            return await retryit.retry(
                lambda: fetch_json(client, "/get"),
                max_retries=2,
                base_delay=0.5,
                should_retry=retry_on_http_status(),
            )

    assert "url" in asyncio.run(run())


def check_fallback() -> None:
    logger.info("Checking fallback...")

    async def fallback() -> dict:
        return {"data": "Fallback data"}

    async def run() -> dict:
        async with httpx.AsyncClient() as client:
            return await retryit.retry(
                lambda: fetch_json(client, "/status/503"),
                max_retries=2,
                base_delay=0.5,
                exponential_backoff=True,
                should_retry=retry_on_http_status(),
                fallback=fallback,
                on_retry=lambda attempt, error: logger.info(f"retry {attempt}: {error}"),
            )

    assert asyncio.run(run()) == {"data": "Fallback data"}


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_retry()
        check_fallback()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
