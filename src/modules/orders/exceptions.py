"""Order domain exceptions.

Raised by the validator, the status machine and the service layer.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist or has been deleted."""


class OrderValidationError(Exception):
    """A candidate order breaks a structural or catalog rule.

    The message is caller-facing and stable (e.g.
    ``"Order must have at least one item."``).
    """


class IllegalOrderState(Exception):
    """A status transition was requested that the workflow does not allow.

    ``reason`` names the failure kind independently of the message:
    ``"terminal-state"``, ``"undefined-state"`` or ``"not-submitted"``.
    """

    TERMINAL_STATE = "terminal-state"
    UNDEFINED_STATE = "undefined-state"
    NOT_SUBMITTED = "not-submitted"

    def __init__(self, message: str, reason: str) -> None:
        self.reason = reason
        super().__init__(message)
