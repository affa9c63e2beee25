from __future__ import annotations

from typing import Any

from dicontract.exceptions import DIContractInvalidRegistrationError


class ArgumentsValidator:
    """Validates arguments passed to registration and resolution APIs."""

    def validate_not_none(self, value: Any, *, operation: str, parameter: str) -> None:
        """Raise when a required argument is ``None``.

        Args:
            value: The argument value.
            operation: Name of the public call, used in the message.
            parameter: Name of the offending parameter, used in the message.

        """
        if value is None:
            msg = f"{operation}() parameter '{parameter}' must not be None."
            raise DIContractInvalidRegistrationError(msg)

    def validate_callable(self, value: Any, *, operation: str, parameter: str) -> None:
        """Raise when a required callback is missing or not callable."""
        if not callable(value):
            msg = f"{operation}() parameter '{parameter}' must be callable, got {value!r}."
            raise DIContractInvalidRegistrationError(msg)
