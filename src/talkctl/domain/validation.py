"""Pure field validators.

A validator is called as ``validate(value, answers)`` where *answers* holds
the values collected so far.  It returns ``None`` when the value is
acceptable and a human-readable reason otherwise.  Validators never raise
and never prompt; the caller decides whether a reason aborts or re-asks.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

Validator = Callable[[str, Mapping[str, Any]], "str | None"]


def required(label: str) -> Validator:
    """Reject empty or whitespace-only values."""

    def validate(value: str, answers: Mapping[str, Any]) -> str | None:
        if not value or not value.strip():
            return f"{label} is required"
        return None

    return validate


def min_length(label: str, length: int) -> Validator:
    def validate(value: str, answers: Mapping[str, Any]) -> str | None:
        if len(value) < length:
            return f"{label} must be at least {length} characters"
        return None

    return validate


def max_length(label: str, length: int) -> Validator:
    def validate(value: str, answers: Mapping[str, Any]) -> str | None:
        if len(value) > length:
            return f"{label} must be at most {length} characters"
        return None

    return validate


def matches(pattern: str, reason: str) -> Validator:
    """Require the whole value to match *pattern*."""
    compiled = re.compile(pattern)

    def validate(value: str, answers: Mapping[str, Any]) -> str | None:
        if compiled.fullmatch(value) is None:
            return reason
        return None

    return validate


def chain(*validators: Validator) -> Validator:
    """Run *validators* in order, returning the first reason found."""

    def validate(value: str, answers: Mapping[str, Any]) -> str | None:
        for validator in validators:
            reason = validator(value, answers)
            if reason is not None:
                return reason
        return None

    return validate
