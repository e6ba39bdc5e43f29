# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Custom exception hierarchy for swatnc.

This module defines the exceptions raised across the converter. Two classes
of failure exist:

- Per-record failures (a malformed station file, an unresolved manifest
  entry) are raised as ``StationParseError`` inside the parsing layer and
  never escape it; callers see ``None`` and a log line.
- Run-level failures (``GridPreconditionError``, ``FileOperationError``,
  ``ConfigurationError``, ``GeospatialError``) stop the conversion.
"""

import logging
from contextlib import contextmanager
from typing import Optional


class SWATNCError(Exception):
    """
    Base exception for all swatnc-specific errors.

    All custom exceptions in swatnc inherit from this class so a caller can
    catch every converter failure with a single except clause.
    """
    pass


class ConfigurationError(SWATNCError):
    """
    Configuration-related errors.

    Raised when:
    - Required configuration keys are missing
    - Configuration values are invalid
    - Configuration file cannot be loaded or parsed
    """
    pass


class ValidationError(SWATNCError):
    """
    Data or parameter validation failures.

    Raised when:
    - Input data fails validation checks
    - Parameter values are out of acceptable range
    """
    pass


class FileOperationError(SWATNCError):
    """
    File I/O operation failures.

    Raised when:
    - The output NetCDF file cannot be created or written
    - Ancillary TxtInOut files cannot be staged
    - The station registry file cannot be written
    """
    pass


class GeospatialError(SWATNCError):
    """
    Geospatial processing failures.

    Raised when:
    - The boundary shapefile is missing or cannot be read
    - Coordinate transformation to EPSG:4326 fails
    """
    pass


class StationParseError(SWATNCError):
    """
    A single station file could not be turned into a station record.

    Carries the offending path so the parsing layer can log it and move on.
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class GridPreconditionError(SWATNCError):
    """
    A terminal precondition of the gridding run failed.

    ``precondition`` names the check that failed:

    - ``spatial_reference``: no stations and no external extent
    - ``start_dates``: no station carries a start date
    - ``step_count``: the computed timeline has no steps
    - ``extent_order``: the final extent is inverted
    """

    def __init__(self, precondition: str, message: str):
        self.precondition = precondition
        super().__init__(f"[{precondition}] {message}")


# =============================================================================
# Validation Helpers
# =============================================================================


def require(condition: bool, message: str, error_type: type = None) -> None:
    """
    Validate a condition, raising an exception if it fails.

    Args:
        condition: The condition that must be True
        message: Error message if condition is False
        error_type: Exception type to raise (default: ValidationError)

    Raises:
        ValidationError (or specified error_type) if condition is False

    Example:
        >>> require(resolution > 0, "Resolution must be positive")
    """
    if error_type is None:
        error_type = ValidationError
    if not condition:
        raise error_type(message)


@contextmanager
def swatnc_error_handler(
    operation: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    error_type: type = SWATNCError
):
    """
    Context manager for standardized error handling.

    swatnc errors pass through unchanged; any other exception is wrapped in
    ``error_type`` with the original chained as ``__cause__``.

    Args:
        operation: Description of the operation being performed (for logging)
        logger: Logger instance for error messages. If None, errors are not logged.
        reraise: Whether to re-raise the exception after handling (default: True)
        error_type: swatnc exception type to convert generic exceptions to

    Example:
        >>> with swatnc_error_handler("writing NetCDF", logger, error_type=FileOperationError):
        ...     sink.write_slice('pcp', 0, grid)
    """
    try:
        yield
    except SWATNCError:
        if logger:
            logger.error(f"Error during {operation}", exc_info=True)
        if reraise:
            raise
    except Exception as e:
        if logger:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
        if reraise:
            raise error_type(f"Failed during {operation}: {e}") from e


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Base
    'SWATNCError',
    # Domain exceptions
    'ConfigurationError',
    'ValidationError',
    'FileOperationError',
    'GeospatialError',
    'StationParseError',
    'GridPreconditionError',
    # Helpers
    'require',
    'swatnc_error_handler',
]
