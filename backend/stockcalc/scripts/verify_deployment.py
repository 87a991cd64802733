#!/usr/bin/env python3
"""
Deployment verification for the Stock Price Calculator.

Usage:
    stockcalc-verify-deployment https://your-app.example.net
    stockcalc-verify-deployment https://your-app.example.net --project-root .
"""
from __future__ import annotations

import argparse
import json
import socket
import sys
from dataclasses import dataclass, field
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from stockcalc.logger import configure_logging, get_logger

logger = get_logger("verify_deployment")

REQUEST_TIMEOUT_SECONDS = 10
TEST_SYMBOL = "AAPL"
REQUIRED_FILES = (
    "pyproject.toml",
    "backend/stockcalc/main.py",
    "backend/stockcalc/api/routes.py",
    "backend/stockcalc/web/templates/index.html",
)


@dataclass
class HttpResult:
    status_code: int
    body: str


@dataclass
class CheckResult:
    name: str
    ok: bool = True
    messages: list[str] = field(default_factory=list)

    def passed(self, message: str) -> None:
        self.messages.append(f"OK    {message}")

    def warn(self, message: str) -> None:
        self.messages.append(f"WARN  {message}")

    def failed(self, message: str) -> None:
        self.ok = False
        self.messages.append(f"FAIL  {message}")


def make_request(url: str) -> HttpResult:
    """GET ``url``; non-2xx statuses are returned, transport errors raise."""
    request = Request(url, method="GET")
    try:
        with urlopen(request, timeout=REQUEST_TIMEOUT_SECONDS) as response:
            return HttpResult(response.status, response.read().decode("utf-8", "replace"))
    except HTTPError as exc:
        return HttpResult(exc.code, exc.read().decode("utf-8", "replace"))


def _report_api_error_hint(result: CheckResult, error: dict) -> None:
    if error.get("code") == "API_UNAVAILABLE":
        result.messages.append(
            "      This might indicate the Alpha Vantage API key is not configured"
        )


def _report_api_error(result: CheckResult, error: dict) -> None:
    result.messages.append(f"      Error: {error.get('code')} - {error.get('message')}")
    _report_api_error_hint(result, error)


class DeploymentVerifier:
    def __init__(self, base_url: str, project_root: Path | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.project_root = project_root or Path.cwd()

    def verify_configuration(self) -> CheckResult:
        result = CheckResult("configuration")
        for relative in REQUIRED_FILES:
            if (self.project_root / relative).exists():
                result.passed(f"{relative} exists")
            else:
                result.failed(f"{relative} is missing")
        return result

    def verify_frontend(self) -> CheckResult:
        result = CheckResult("frontend")
        try:
            response = make_request(self.base_url)
        except (URLError, TimeoutError, socket.timeout, ConnectionError) as exc:
            result.failed(f"Frontend verification failed: {exc}")
            return result

        if response.status_code != 200:
            result.failed(f"Frontend returned status code: {response.status_code}")
            return result

        result.passed("Frontend is accessible")
        if "Stock Price Calculator" in response.body:
            result.passed("Frontend content looks correct")
        else:
            result.warn("Frontend content may not be correct")
        return result

    def verify_api(self) -> CheckResult:
        result = CheckResult("api")
        url = f"{self.base_url}/api/stock/{TEST_SYMBOL}"
        try:
            response = make_request(url)
        except (URLError, TimeoutError, socket.timeout, ConnectionError) as exc:
            result.failed(f"API verification failed: {exc}")
            return result

        try:
            payload = json.loads(response.body)
        except json.JSONDecodeError:
            payload = None
        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            error = None

        if response.status_code != 200:
            if response.status_code == 404 and error is None:
                result.failed("API endpoint not found - check the deployment")
            elif response.status_code == 500:
                result.failed("API internal server error - check the function logs")
            else:
                result.failed(f"API returned status code: {response.status_code}")
            if error is not None:
                _report_api_error(result, error)
            return result

        result.passed("API is accessible")
        if payload is None:
            result.warn("API response is not valid JSON")
            return result
        if not isinstance(payload, dict):
            result.warn("API response is not a JSON object")
            return result

        data = payload.get("data")
        if payload.get("success") and isinstance(data, dict):
            result.passed("API returns valid stock data")
            result.messages.append(f"      Symbol: {data.get('symbol')}")
            result.messages.append(f"      Current Price: ${data.get('currentPrice')}")
            result.messages.append(f"      Previous Close: ${data.get('previousClose')}")
            result.messages.append(f"      Last Updated: {data.get('lastUpdated')}")
        elif error is not None:
            result.warn(f"API returned error: {error.get('message')}")
            _report_api_error_hint(result, error)
        return result

    def run(self) -> list[CheckResult]:
        logger.info(f"Verifying deployment for: {self.base_url}")
        results = [self.verify_configuration(), self.verify_frontend(), self.verify_api()]
        for result in results:
            logger.info(f"[{result.name}]")
            for message in result.messages:
                logger.info(f"  {message}")
        logger.info("Deployment verification complete")
        if not all(result.ok for result in results):
            logger.warning(
                "If you see any issues: check the CI logs, verify ALPHA_VANTAGE_API_KEY "
                "in the hosting environment and check the application logs."
            )
        return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify a Stock Price Calculator deployment.")
    parser.add_argument("base_url", help="Deployment URL, e.g. https://your-app.example.net")
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Local checkout used for the configuration check (default: cwd)",
    )
    args = parser.parse_args(argv)

    configure_logging("INFO")
    results = DeploymentVerifier(args.base_url, args.project_root).run()
    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
