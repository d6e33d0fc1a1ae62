"""Error logging utilities for data generation."""

import traceback
from typing import Any, Optional, Dict
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    operation: Optional[str] = None,
    entity_name: Optional[str] = None,
    field_name: Optional[str] = None,
    log_level: str = "error",
) -> None:
    """
    Log an error with its type, message, context and traceback.

    Args:
        error: The exception that occurred
        context: Additional context dictionary (e.g., {'stage': 'generating', 'count': 100})
        operation: Description of the operation being performed
        entity_name: Name of the entity where the error occurred
        field_name: Name of the field where the error occurred
        log_level: Logging level ('error', 'warning', 'critical')
    """
    error_type = type(error).__name__

    context_parts = []
    if operation:
        context_parts.append(f"Operation: {operation}")
    if entity_name:
        context_parts.append(f"Entity: {entity_name}")
    if field_name:
        context_parts.append(f"Field: {field_name}")
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        context_parts.append(f"Context: {context_str}")

    error_msg = f"[{error_type}] {error}"
    if context_parts:
        error_msg += " | " + " | ".join(context_parts)

    if log_level.lower() == "critical":
        logger.critical(error_msg, exc_info=error)
    elif log_level.lower() == "warning":
        logger.warning(error_msg, exc_info=error)
    else:
        logger.error(error_msg, exc_info=error)

    logger.debug(
        f"Full traceback for {error_type}:\n"
        + "".join(traceback.format_exception(type(error), error, error.__traceback__))
    )
