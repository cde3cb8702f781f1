"""Utility functions."""

from portal.utils.response import (
    conflict,
    error_response,
    forbidden,
    not_found,
    result_error,
    server_error,
    success_response,
    unauthorized,
    validation_error,
)

__all__ = [
    "success_response",
    "error_response",
    "unauthorized",
    "forbidden",
    "not_found",
    "validation_error",
    "conflict",
    "server_error",
    "result_error",
]
