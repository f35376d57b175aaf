"""Lighthouse CLI engine for lighthouse-batch."""

import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError

from config.models import AuditOptions, LighthouseResult
from .base import AuditEngine, AuditEngineError

logger = logging.getLogger(__name__)


class LighthouseEngine(AuditEngine):
    """
    Runs the `lighthouse` command line tool as a subprocess.

    The CLI launches headless Chrome, audits the page and kills Chrome before
    it exits, so each audit owns a fresh browser. Only one audit should be in
    flight at a time.
    """

    name = "lighthouse"

    def __init__(self, lighthouse_path: str = "lighthouse", timeout_seconds: float = 300):
        self.lighthouse_path = lighthouse_path
        self.timeout_seconds = timeout_seconds

    def build_command(self, url: str, options: AuditOptions) -> List[str]:
        cmd = [
            self.lighthouse_path,
            url,
            "--output=json",
            "--output-path=stdout",
            "--quiet",
        ]
        if options.chrome_flags:
            cmd.append(f"--chrome-flags={' '.join(options.chrome_flags)}")
        if options.only_categories:
            cmd.append(f"--only-categories={','.join(options.only_categories)}")
        return cmd

    async def run_audit(self, url: str, options: AuditOptions) -> LighthouseResult:
        cmd = self.build_command(url, options)
        logger.debug("Running %s", " ".join(cmd))

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise AuditEngineError(url, f"Lighthouse executable not found: {self.lighthouse_path}")

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            await self._kill(process)
            raise AuditEngineError(url, f"Lighthouse timed out after {self.timeout_seconds}s")

        if process.returncode != 0:
            # Lighthouse still prints the report, then exits 1, when runtimeError is set.
            result = self._parse_runtime_error(stdout)
            if result is not None:
                return result
            detail = self._last_line(stderr) or f"exit code {process.returncode}"
            raise AuditEngineError(url, f"Lighthouse failed: {detail}")

        try:
            return LighthouseResult.model_validate_json(stdout)
        except ValidationError as e:
            raise AuditEngineError(url, f"Invalid Lighthouse output: {e}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()

    def _parse_runtime_error(self, stdout: Optional[bytes]) -> Optional[LighthouseResult]:
        if not stdout:
            return None
        try:
            result = LighthouseResult.model_validate_json(stdout)
        except ValidationError:
            return None
        return result if result.has_runtime_error else None

    def _last_line(self, data: Optional[bytes]) -> str:
        if not data:
            return ""
        lines = data.decode("utf-8", errors="replace").strip().splitlines()
        return lines[-1] if lines else ""
