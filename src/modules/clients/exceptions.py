"""Client directory exceptions.

``ClientNotFound`` is a business outcome (the tax id is unknown);
``ClientApiError`` is a transport failure and must never be read as
"not found".
"""

from __future__ import annotations


class ClientNotFound(Exception):
    """No client is registered under the given tax id (CPF)."""

    def __init__(self, tax_id: str) -> None:
        self.tax_id = tax_id
        super().__init__(f"Client with CPF {tax_id} not found.")


class ClientApiError(Exception):
    """The client directory could not be reached or answered unexpectedly."""
