"""Observability module for audit logging."""

from sourcepath.observability.audit import AuditSink, JSONLAuditSink, StdoutAuditSink, emit

__all__ = ["AuditSink", "JSONLAuditSink", "StdoutAuditSink", "emit"]
