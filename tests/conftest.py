"""
Shared test fixtures.

The application object graph normally comes from the REST client; here it is
replaced by small in-memory fakes that expose the same accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from app_asserts.infrastructure.config import get_settings
from app_asserts.infrastructure.log_setup import configure_logging


@dataclass(frozen=True)
class FakeCartridge:
    name: str


@dataclass
class FakeConnection:
    embeddable_cartridges: list[FakeCartridge] = field(default_factory=list)


@dataclass
class FakeUser:
    connection: FakeConnection | None = None


@dataclass
class FakeDomain:
    id: str
    suffix: str
    user: FakeUser | None = None


@dataclass
class FakeApplication:
    name: str
    uuid: str | None
    domain: FakeDomain | None
    creation_time: str | None = None
    cartridge: FakeCartridge | None = None
    embedded_cartridges: list[FakeCartridge] | None = field(default_factory=list)
    aliases: list[str] | None = field(default_factory=list)
    application_url: str | None = None
    git_url: str | None = None


@dataclass(frozen=True)
class NamePrefixConstraint:
    """Selects cartridges whose name starts with *prefix*."""

    prefix: str

    def select(self, candidates):
        return [c for c in candidates if c.name.startswith(self.prefix)]


MYSQL = FakeCartridge("mysql-5.1")
POSTGRES = FakeCartridge("postgresql-8.4")
MONGO = FakeCartridge("mongodb-2.2")
JBOSS = FakeCartridge("jbossas-7")


def pytest_configure(config):
    """Honour APP_ASSERTS_LOG_LEVEL for check traces during the test session."""
    configure_logging()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection(embeddable_cartridges=[MYSQL, POSTGRES, MONGO])


@pytest.fixture
def domain(connection: FakeConnection) -> FakeDomain:
    return FakeDomain(id="myscope", suffix="example.com", user=FakeUser(connection=connection))


@pytest.fixture
def application(domain: FakeDomain) -> FakeApplication:
    """The reference application: ``blog`` in domain ``myscope`` on ``example.com``."""
    return FakeApplication(
        name="blog",
        uuid="abcd1234",
        domain=domain,
        creation_time="2012-09-10T12:00:00-04:00",
        cartridge=JBOSS,
        application_url="https://blog-myscope.example.com/",
        git_url="ssh://abcd1234@blog-myscope.example.com/~/git/blog.git/",
    )
