# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-02-07
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from utility.logging_utils import get_class_logger


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Checks included:
      - catalog_health   (catalog database reachable)
      - vector_health    (vector index collection reachable)
      - embedding_health (embedding model returns a vector of the right size)
      - chat_health      (chat model answers a ping, optional)
    """

    __test__ = False  # not a pytest test class

    def __init__(
            self,
            *,
            catalog,
            vector_store,
            embedder,
            chat_client=None,
            logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info("Initialising SmokeTestRunner")

        self.checks: List[Tuple[str, Callable[[], bool]]] = [
            ("catalog_health", catalog.test_connection),
            ("vector_health", vector_store.test_connection),
            ("embedding_health", embedder.healthcheck),
        ]
        self.chat_check: Optional[Callable[[], bool]] = chat_client.healthcheck if chat_client else None

    # -------------------------------------------------------------------------
    def run_all(self, run_chat: bool = False) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_chat: If True, also pings the chat model (slow on a cold Ollama).
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_chat=%s)", run_chat)

        checks = list(self.checks)
        if run_chat and self.chat_check is not None:
            checks.append(("chat_health", self.chat_check))

        results: Dict[str, bool] = {}
        for name, check in checks:
            try:
                self.logger.info("Running %s", name)
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)
