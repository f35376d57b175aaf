"""Batch Lighthouse audit services."""
