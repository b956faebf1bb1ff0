#!/usr/bin/env python3
"""Worker pool sizing for batch detection."""

from __future__ import annotations

import os

import psutil

MAX_WORKERS_ENV = "FORMATDETECT_MAX_WORKERS"
WORKER_CEILING = 32


def default_worker_count() -> int:
    """Default pool size: one thread per logical CPU plus headroom for blocking reads"""
    cpus = psutil.cpu_count(logical=True) or 1
    return min(WORKER_CEILING, cpus + 4)


def cap_workers_for_execution(workers: int) -> int:
    cap_text = os.getenv(MAX_WORKERS_ENV, "").strip()
    if not cap_text:
        return workers
    try:
        cap = int(cap_text)
    except ValueError:
        return workers
    if cap <= 0:
        return workers
    return min(workers, cap)


def resolve_worker_count(requested: int | None = None) -> int:
    """
    Resolve the bound on concurrent units for one batch.

    Args:
        requested: Explicit worker count, or None for the CPU-derived default

    Returns:
        Positive worker count after the environment cap is applied
    """
    if requested is not None and requested < 1:
        raise ValueError("max_workers must be at least 1")
    workers = requested if requested is not None else default_worker_count()
    return cap_workers_for_execution(workers)
