"""
Base audit engine classes for lighthouse-batch.
"""

import abc
import logging
import time
from typing import Optional

from config.models import AuditOptions, LighthouseResult
from config.settings import AuditConfig, get_audit_config

logger = logging.getLogger(__name__)


class AuditEngineError(Exception):
    """Raised when the engine itself fails, e.g. the browser could not start."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url
        self.message = message


class AuditEngine(abc.ABC):
    """Audits one page at a time and returns a Lighthouse result."""

    name = "engine"

    # ------------------------------------------------------------------
    # Engines must implement only this
    # ------------------------------------------------------------------
    @abc.abstractmethod
    async def run_audit(self, url: str, options: AuditOptions) -> LighthouseResult:
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Execution wrapper
    # ------------------------------------------------------------------
    async def audit(self, url: str, options: AuditOptions) -> LighthouseResult:
        if not url or not url.strip():
            raise AuditEngineError(url, "Empty URL")

        start = time.time()
        logger.debug(f"→ START {self.name} audit for {url}")

        result = await self.run_audit(url, options)

        elapsed_ms = int((time.time() - start) * 1000)
        logger.debug(f"✓ DONE {self.name} audit for {url} in {elapsed_ms}ms")
        return result


class EngineFactory:
    """Factory to create engines from configuration."""

    @staticmethod
    def create(config: Optional[AuditConfig] = None) -> AuditEngine:
        config = config or get_audit_config()
        from engines.lighthouse_engine import LighthouseEngine
        return LighthouseEngine(
            lighthouse_path=config.lighthouse_path,
            timeout_seconds=config.engine_timeout_seconds,
        )
