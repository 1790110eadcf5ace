# util/timing.py
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
import logging


@contextmanager
def timed(
    logger: logging.Logger,
    name: str,
    slow_ms: Optional[float] = None,
    **kv: Any,
) -> Iterator[Dict[str, Any]]:
    """
    Usage:
      with timed(logger, "quiz.verify", questions=12) as stage:
          ...
          stage["corrected"] = 3
    Emits "<name>.done ms=<float> key=val ..." on exit; fields added to the yielded
    dict inside the block are included. Over `slow_ms` the line is a WARNING.
    """
    fields: Dict[str, Any] = dict(kv)
    t0 = time.perf_counter()
    try:
        yield fields
    finally:
        dt_ms = (time.perf_counter() - t0) * 1000
        suffix = "".join(f" {k}={v}" for k, v in fields.items())
        level = logging.WARNING if slow_ms is not None and dt_ms > slow_ms else logging.INFO
        logger.log(level, "%s.done ms=%.2f%s", name, dt_ms, suffix)
