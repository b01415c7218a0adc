from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from time import perf_counter
from typing import Any

from .exceptions import ApiError
from .http_client import HttpClient
from .logging_setup import get_logger, log_event
from .models import (
    CategoryCounts,
    EndpointDescriptor,
    RequestDescriptor,
    ValidationReport,
    ValidationResult,
    ValidationStatus,
)
from .routes import DEFAULT_ROUTE_TABLE

logger = get_logger("toona_admin_sdk.validator")

ProgressCallback = Callable[[int, int], None]
Sleeper = Callable[[float], Awaitable[Any]]


def mutation_skipped_message(method: str) -> str:
    return f"{method.upper()} not executed automatically (avoids data modification)"


class EndpointValidator:
    def __init__(
        self,
        http: HttpClient,
        routes: Sequence[EndpointDescriptor] | None = None,
        *,
        delay_seconds: float = 0.2,
        sleep: Sleeper | None = None,
    ) -> None:
        self.http = http
        self.routes = tuple(DEFAULT_ROUTE_TABLE if routes is None else routes)
        self.delay_seconds = max(0.0, delay_seconds)
        self._sleep = sleep or asyncio.sleep

    async def validate_all(self, on_progress: ProgressCallback | None = None) -> AsyncIterator[ValidationResult]:
        total = len(self.routes)
        log_event(logger, "validator", "run.start", "running", total=total)
        for index, route in enumerate(self.routes):
            if index > 0 and self.delay_seconds:
                await self._sleep(self.delay_seconds)
            result = await self.validate_endpoint(route)
            if on_progress:
                on_progress(index + 1, total)
            yield result
        log_event(logger, "validator", "run.finish", "done", total=total)

    async def collect(self, on_progress: ProgressCallback | None = None) -> list[ValidationResult]:
        return [result async for result in self.validate_all(on_progress)]

    async def validate_endpoint(self, route: EndpointDescriptor) -> ValidationResult:
        method = route.method.upper()
        if route.is_mutating:
            log_event(logger, "validator", f"{method} {route.path}", "skipped")
            return ValidationResult(
                endpoint=route.path,
                method=method,
                category=route.category,
                name=route.name,
                status=ValidationStatus.WARNING,
                message=mutation_skipped_message(method),
            )

        started = perf_counter()
        try:
            response = await self.http.send(RequestDescriptor(method=method, path=route.path, notify=False))
        except ApiError as error:
            elapsed_ms = int(round((perf_counter() - started) * 1000))
            log_event(
                logger,
                "validator",
                f"{method} {route.path}",
                "error",
                level=logging.WARNING,
                status=error.status_code,
                elapsed_ms=elapsed_ms,
            )
            return ValidationResult(
                endpoint=route.path,
                method=method,
                category=route.category,
                name=route.name,
                status=ValidationStatus.ERROR,
                http_code=error.status_code or None,
                message=error.message,
                elapsed_ms=elapsed_ms,
            )

        elapsed_ms = int(round((perf_counter() - started) * 1000))
        log_event(logger, "validator", f"{method} {route.path}", "success", elapsed_ms=elapsed_ms)
        return ValidationResult(
            endpoint=route.path,
            method=method,
            category=route.category,
            name=route.name,
            status=ValidationStatus.SUCCESS,
            http_code=response.status_code,
            message="OK",
            elapsed_ms=elapsed_ms,
        )


def summarize(results: Sequence[ValidationResult]) -> ValidationReport:
    by_category: dict[str, CategoryCounts] = {}
    for result in results:
        counts = by_category.setdefault(result.category, CategoryCounts())
        if result.status is ValidationStatus.SUCCESS:
            counts.success += 1
        elif result.status is ValidationStatus.WARNING:
            counts.warning += 1
        else:
            counts.error += 1
        counts.total += 1
    return ValidationReport(
        total=len(results),
        successful=sum(1 for item in results if item.status is ValidationStatus.SUCCESS),
        failed=sum(1 for item in results if item.status is ValidationStatus.ERROR),
        warnings=sum(1 for item in results if item.status is ValidationStatus.WARNING),
        by_category=by_category,
        results=list(results),
    )


def report_to_text(report: ValidationReport) -> str:
    marks = {
        ValidationStatus.SUCCESS: "OK  ",
        ValidationStatus.ERROR: "FAIL",
        ValidationStatus.WARNING: "WARN",
    }
    lines = [
        "Endpoint validation report",
        f"success: {report.successful}  errors: {report.failed}  warnings: {report.warnings}  total: {report.total}",
    ]
    for category, counts in report.by_category.items():
        lines.append(
            f"[{category}] success={counts.success} warning={counts.warning} error={counts.error} total={counts.total}"
        )
    for result in report.results:
        lines.append(f"{marks[result.status]} {result.method} {result.endpoint}")
        if result.http_code is not None:
            lines.append(f"     status: {result.http_code} | time: {result.elapsed_ms}ms")
        if result.message:
            lines.append(f"     message: {result.message}")
    return "\n".join(lines)
