"""Suppliers for the principal on whose behalf pixx.io is accessed.

Two implementations are provided:
- ``AnonymousPrincipalSupplier`` for batch jobs and other contexts without a user
- ``ContextPrincipalSupplier`` bound to the current request via ``contextvars``

Example:
    ```python
    supplier = ContextPrincipalSupplier()

    with supplier.bind("editor@example.com"):
        client = asset_source.get_client(supplier)
    ```
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Protocol, runtime_checkable


@runtime_checkable
class PrincipalSupplier(Protocol):
    """Reports whether a principal is active and who it is."""

    def is_active(self) -> bool: ...

    def current_principal_identifier(self) -> str:
        """Return the active principal. Only called when ``is_active()`` is true."""
        ...


class AnonymousPrincipalSupplier:
    """Supplier that never reports an active principal."""

    def is_active(self) -> bool:
        return False

    def current_principal_identifier(self) -> str:
        raise LookupError("No principal is active in an anonymous context")


class ContextPrincipalSupplier:
    """Supplier bound to the principal of the active request or session.

    The identifier lives in a ``ContextVar``, so threads and asyncio tasks
    serving different requests each see their own principal.
    """

    def __init__(self, name: str = "pixxio_principal"):
        self._current: ContextVar[str | None] = ContextVar(name, default=None)

    def is_active(self) -> bool:
        return bool(self._current.get())

    def current_principal_identifier(self) -> str:
        identifier = self._current.get()
        if not identifier:
            raise LookupError("No principal is bound to the current context")
        return identifier

    @contextmanager
    def bind(self, principal_identifier: str) -> Iterator[None]:
        """Bind ``principal_identifier`` for the duration of the ``with`` block."""
        token = self._current.set(principal_identifier)
        try:
            yield
        finally:
            self._current.reset(token)
