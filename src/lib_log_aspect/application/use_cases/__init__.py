"""Use cases wiring ports into the logging core's callables."""

from __future__ import annotations

from .log_record import create_dispatch_record, routes_to_error_stream
from .report_exception import create_report_exception

__all__ = ["create_dispatch_record", "create_report_exception", "routes_to_error_stream"]
