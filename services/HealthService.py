# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-07
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from api.schemas.health import DeepHealthResponse, SmokeTestSummary
from health.TestRunner import TestRunner


@dataclass
class HealthService:
    """
    Wraps TestRunner, which runs smoke tests against the catalog database,
    vector index and Ollama models.
    Returns DeepHealthResponse for API layer
    """

    test_runner: TestRunner

    def deep_health(self, run_chat: bool = False) -> DeepHealthResponse:
        results = self.test_runner.run_all(run_chat=run_chat)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
        )
