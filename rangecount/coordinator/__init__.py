"""Partitioning, dispatch and job orchestration."""
