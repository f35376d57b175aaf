"""Audit engines for lighthouse-batch."""

from .base import AuditEngine, AuditEngineError, EngineFactory
from .lighthouse_engine import LighthouseEngine

__all__ = ["AuditEngine", "AuditEngineError", "EngineFactory", "LighthouseEngine"]
