"""
Audit Logger

DESIGN DECISION: Every state change in the tracker is logged.
This provides:
1. Traceability of what the user did
2. Debugging capability when stored state looks wrong
3. A record of silent recoveries the user never sees

The audit logger:
- Is synchronous like the rest of the tracker
- Never raises into callers (a logging failure must not abort a habit update)
"""

import logging
from typing import Optional

import structlog

from personal_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route the structured log to stderr at ``level``."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("personal_tracker").setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Writes AuditEvents to the structured local log.
    """

    def __init__(self, logger_name: str = "personal_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log call itself failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (OSError, TypeError, ValueError):
            return False

        return True

    def log_habit_added(self, habit_id: str, name: str) -> None:
        self.log(AuditEventBuilder.habit_added(habit_id, name))

    def log_habit_completed(self, habit_id: str, name: str, day: str, streak: int) -> None:
        self.log(AuditEventBuilder.habit_completed(habit_id, name, day, streak))

    def log_habit_reset(self, habit_id: str, name: str, previous_streak: int) -> None:
        self.log(AuditEventBuilder.habit_reset(habit_id, name, previous_streak))

    def log_habit_deleted(self, habit_id: str, name: str, purged_days: list[str]) -> None:
        self.log(AuditEventBuilder.habit_deleted(habit_id, name, purged_days))

    def log_habit_toggled(self, name: str, day: str, done: bool) -> None:
        self.log(AuditEventBuilder.habit_toggled(name, day, done))

    def log_entry_added(self, entry_id: str, kind: str, amount: str, day: str) -> None:
        self.log(AuditEventBuilder.entry_added(entry_id, kind, amount, day))

    def log_entry_deleted(self, entry_id: str) -> None:
        self.log(AuditEventBuilder.entry_deleted(entry_id))

    def log_budget_saved(self, budget: Optional[str]) -> None:
        self.log(AuditEventBuilder.budget_saved(budget))

    def log_validation_failed(self, operation: str, issues: list[dict]) -> None:
        """Log a rejected user input."""
        self.log(AuditEventBuilder.validation_failed(operation, issues))

    def log_state_loaded(self, counts: dict[str, int]) -> None:
        self.log(AuditEventBuilder.state_loaded(counts))

    def log_store_read_recovered(self, key: str, error_message: str) -> None:
        """Log a corrupt store value that was replaced by its default."""
        self.log(AuditEventBuilder.store_read_recovered(key, error_message))

    def log_store_write_failed(self, key: str, error_message: str) -> None:
        """Log a write that was dropped. Writes are never retried."""
        self.log(AuditEventBuilder.store_write_failed(key, error_message))
