"""Audit orchestration service for lighthouse-batch."""
