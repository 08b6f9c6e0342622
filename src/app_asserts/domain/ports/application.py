"""Port: application object graph — owned and populated by the REST client layer.

Only the read-only accessors consumed by the assertion engine are described
here.  Any object exposing these attributes satisfies the protocols.
"""

from __future__ import annotations

from typing import Collection, Protocol


class Cartridge(Protocol):
    """A cartridge (primary or embeddable) identified by its name."""

    @property
    def name(self) -> str: ...


class CartridgeConstraint(Protocol):
    """Selection predicate over a collection of cartridges."""

    def select(self, candidates: Collection[Cartridge]) -> Collection[Cartridge]:
        """Return the subset of *candidates* matching this constraint."""
        ...


class Connection(Protocol):
    """The user's active session against the server."""

    @property
    def embeddable_cartridges(self) -> Collection[Cartridge]: ...


class User(Protocol):
    @property
    def connection(self) -> Connection | None: ...


class Domain(Protocol):
    """Owning namespace of an application."""

    @property
    def id(self) -> str: ...

    @property
    def suffix(self) -> str: ...

    @property
    def user(self) -> User | None: ...


class Application(Protocol):
    """A hosted application as seen by the client."""

    @property
    def name(self) -> str: ...

    @property
    def uuid(self) -> str | None: ...

    @property
    def creation_time(self) -> str | None: ...

    @property
    def cartridge(self) -> Cartridge | None: ...

    @property
    def embedded_cartridges(self) -> Collection[Cartridge] | None: ...

    @property
    def aliases(self) -> Collection[str] | None: ...

    @property
    def application_url(self) -> str | None: ...

    @property
    def git_url(self) -> str | None: ...

    @property
    def domain(self) -> Domain | None: ...
