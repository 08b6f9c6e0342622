"""Fluent assertions over a single application object.

Every chainable check re-reads the live application fields, so an
application may be mutated between two checks of the same chain.  A check
either returns the same :class:`ApplicationAssert` or raises at once:

* :class:`GrammarMismatchError` — a URL does not have the required shape;
* :class:`FieldMismatchError` (and its member subclasses) — a value differs;
* :class:`BrokenFixtureError` — the application → domain → user → connection
  chain is incomplete, i.e. the fixture itself is wrong.

Usage::

    assert_that(app).has_name("blog").has_valid_git_url().has_cartridges_named("mysql-5.1")
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Iterable, NoReturn

from app_asserts.domain.exceptions import (
    A_COLLECTION,
    A_VALUE,
    AssertionFailure,
    BrokenFixtureError,
    FieldMismatchError,
    GrammarMismatchError,
    MissingMemberError,
    UnexpectedMemberError,
)
from app_asserts.domain.ports.application import (
    Application,
    Cartridge,
    CartridgeConstraint,
    Connection,
    Domain,
)
from app_asserts.domain.value_objects import (
    GIT_LOCATOR,
    Conforms,
    Decomposition,
    LocatorGrammar,
    NotConforming,
    normalize_web_schemes,
    web_locator_grammar,
)
from app_asserts.infrastructure.config import get_settings

logger = logging.getLogger(__name__)


# ── Connection walk ─────────────────────────────────────────────────────────


def _link(owner: Any, attribute: str, label: str) -> Any:
    value = getattr(owner, attribute, None)
    if value is None:
        logger.info("Broken fixture: %s is None", label)
        raise BrokenFixtureError(label)
    return value


def resolve_domain(application: Application) -> Domain:
    """Return the owning domain, or raise :class:`BrokenFixtureError`."""
    return _link(application, "domain", "application.domain")


def resolve_connection(application: Application) -> Connection:
    """Walk application → domain → user → connection.

    Stops at the first missing link and raises :class:`BrokenFixtureError`
    naming it, rather than letting a later check report a missing cartridge.
    """
    domain = resolve_domain(application)
    user = _link(domain, "user", "domain.user")
    return _link(user, "connection", "user.connection")


def _names(cartridges: Iterable[Cartridge]) -> list[str]:
    return [cartridge.name for cartridge in cartridges]


# ── Assertion engine ────────────────────────────────────────────────────────


class ApplicationAssert:
    """Chainable checks against one application.

    Parameters
    ----------
    application:
        The object under test; read, never modified.
    web_schemes:
        URL schemes accepted by :meth:`has_valid_application_url`.  Defaults
        to ``Settings.web_schemes``.  Normalised like the setting: a bare
        string raises ``TypeError``, an empty collection ``ValueError``.
    """

    def __init__(
        self,
        application: Application,
        *,
        web_schemes: Iterable[str] | None = None,
    ) -> None:
        if application is None:
            raise BrokenFixtureError("application")
        self._application = application
        self._web_schemes = (
            normalize_web_schemes(web_schemes) if web_schemes is not None else None
        )

    @property
    def application(self) -> Application:
        return self._application

    # ── Direct fields ───────────────────────────────────────────────────

    def has_name(self, name: str) -> ApplicationAssert:
        self._expect_equal("name", name, self._application.name)
        return self

    def has_uuid(self, uuid: str) -> ApplicationAssert:
        self._expect_equal("uuid", uuid, self._application.uuid)
        return self

    def has_any_uuid(self) -> ApplicationAssert:
        """Pass if the application has been assigned a uuid at all."""
        self._expect_present("uuid", self._application.uuid)
        return self

    def has_cartridge(self, cartridge: Cartridge) -> ApplicationAssert:
        """Compare the primary (standalone) cartridge."""
        self._expect_equal("cartridge", cartridge, self._application.cartridge)
        return self

    def has_creation_time(self, creation_time: str) -> ApplicationAssert:
        self._expect_equal("creation_time", creation_time, self._application.creation_time)
        return self

    def has_any_creation_time(self) -> ApplicationAssert:
        self._expect_present("creation_time", self._application.creation_time)
        return self

    def has_application_url(self, application_url: str) -> ApplicationAssert:
        self._expect_equal("application_url", application_url, self._application.application_url)
        return self

    def has_git_url(self, git_url: str) -> ApplicationAssert:
        self._expect_equal("git_url", git_url, self._application.git_url)
        return self

    # ── Locator cross-checks ────────────────────────────────────────────

    def has_valid_application_url(self) -> ApplicationAssert:
        """Decompose the application URL and match it against name and domain.

        The URL must read ``scheme://<name>-<domain id>.<domain suffix>/...``.
        """
        grammar = self._web_grammar()
        slots = self._decompose(grammar, self._application.application_url)

        domain = resolve_domain(self._application)
        self._expect_equal("application_url[name]", self._application.name, slots.slot("name"))
        self._expect_equal("application_url[domain_id]", domain.id, slots.slot("domain_id"))
        self._expect_equal("application_url[suffix]", domain.suffix, slots.slot("suffix"))
        return self

    def has_valid_git_url(self) -> ApplicationAssert:
        """Decompose the git URL and match it against uuid, name and domain suffix.

        The application name occurs twice (host part and repository name);
        both must equal the application name.  The domain id slot is not
        checked.
        """
        slots = self._decompose(GIT_LOCATOR, self._application.git_url)

        domain = resolve_domain(self._application)
        self._expect_equal("git_url[uuid]", self._application.uuid, slots.slot("uuid"))
        self._expect_equal("git_url[name]", self._application.name, slots.slot("name"))
        self._expect_equal("git_url[suffix]", domain.suffix, slots.slot("suffix"))
        self._expect_equal("git_url[repo_name]", self._application.name, slots.slot("repo_name"))
        return self

    # ── Embedded cartridges ─────────────────────────────────────────────

    def has_cartridges_matching(self, constraint: CartridgeConstraint) -> ApplicationAssert:
        """Every catalog cartridge selected by *constraint* must be embedded.

        The catalog is the connection's list of embeddable cartridges.
        """
        catalog = resolve_connection(self._application).embeddable_cartridges
        embedded = _names(self._embedded_cartridges())
        for cartridge in constraint.select(catalog):
            self._expect_member("embedded_cartridges", cartridge.name, embedded)
        return self

    def has_cartridges_named(self, *names: str) -> ApplicationAssert:
        """Each of *names* must be embedded.

        Careful: called with no names this asserts that the application has
        **no** embedded cartridges.  ``has_cartridges_named(*[])`` therefore
        asserts emptiness, it does not skip the check.
        """
        embedded = _names(self._embedded_cartridges())
        if not names:
            self._expect_equal("len(embedded_cartridges)", 0, len(embedded))
        for name in names:
            self._expect_member("embedded_cartridges", name, embedded)
        return self

    def has_cartridge_count(self, count: int) -> ApplicationAssert:
        self._expect_equal("len(embedded_cartridges)", count, len(self._embedded_cartridges()))
        return self

    def has_not_cartridges_named(self, *names: str) -> ApplicationAssert:
        embedded = _names(self._embedded_cartridges())
        for name in names:
            self._expect_absent("embedded_cartridges", name, embedded)
        return self

    def has_not_cartridges_matching(self, *constraints: CartridgeConstraint) -> ApplicationAssert:
        """No embedded cartridge may be selected by any of *constraints*."""
        cartridges = self._embedded_cartridges()
        for constraint in constraints:
            selected = list(constraint.select(cartridges))
            if selected:
                self._fail(
                    UnexpectedMemberError("embedded_cartridges", selected[0].name, _names(cartridges))
                )
        return self

    # ── Aliases ─────────────────────────────────────────────────────────

    def has_aliases(self, *aliases: str) -> ApplicationAssert:
        """Each of *aliases* must be present.

        As with :meth:`has_cartridges_named`, no arguments means the
        application must have no aliases at all.
        """
        present = list(self._collection("aliases", self._application.aliases))
        if not aliases:
            self._expect_equal("len(aliases)", 0, len(present))
        for alias in aliases:
            self._expect_member("aliases", alias, present)
        return self

    def has_alias_count(self, count: int) -> ApplicationAssert:
        present = self._collection("aliases", self._application.aliases)
        self._expect_equal("len(aliases)", count, len(present))
        return self

    # ── Terminal membership helpers ─────────────────────────────────────

    def assert_lacks_cartridge(self, name: str) -> None:
        """No embedded cartridge may be called *name*."""
        self._expect_absent("embedded_cartridges", name, _names(self._embedded_cartridges()))

    def assert_lacks_embeddable(self, cartridge: Cartridge) -> None:
        self.assert_lacks_cartridge(cartridge.name)

    def assert_excludes_cartridges(
        self, unwanted: Iterable[Cartridge], cartridges: Collection[Cartridge]
    ) -> None:
        """None of *unwanted* may appear in *cartridges* (compared by equality)."""
        for cartridge in unwanted:
            self._expect_absent("cartridges", cartridge, cartridges)

    def assert_contains_cartridges(
        self, wanted: Iterable[Cartridge], cartridges: Collection[Cartridge]
    ) -> None:
        """All of *wanted* must appear in *cartridges* (compared by equality)."""
        for cartridge in wanted:
            self._expect_member("cartridges", cartridge, cartridges)

    # ── Internals ───────────────────────────────────────────────────────

    def _web_grammar(self) -> LocatorGrammar:
        schemes = self._web_schemes
        if schemes is None:
            schemes = tuple(get_settings().web_schemes)
        return web_locator_grammar(schemes)

    def _decompose(self, grammar: LocatorGrammar, text: Any) -> Conforms:
        return self._conforming(grammar.decompose(text))

    def _conforming(self, result: Decomposition) -> Conforms:
        logger.debug("Checking %s of %s", result.grammar, self._label())
        if isinstance(result, NotConforming):
            self._fail(GrammarMismatchError(result.grammar, result.form, result.text))
        return result

    def _embedded_cartridges(self) -> Collection[Cartridge]:
        return self._collection("embedded_cartridges", self._application.embedded_cartridges)

    def _collection(self, field: str, value: Collection[Any] | None) -> Collection[Any]:
        if value is None:
            self._fail(FieldMismatchError(field, A_COLLECTION, None))
        return value

    def _expect_equal(self, field: str, expected: Any, actual: Any) -> None:
        logger.debug("Checking %s of %s", field, self._label())
        if actual != expected:
            self._fail(FieldMismatchError(field, expected, actual))

    def _expect_present(self, field: str, actual: Any) -> None:
        logger.debug("Checking %s of %s is set", field, self._label())
        if actual is None:
            self._fail(FieldMismatchError(field, A_VALUE, None))

    def _expect_member(self, field: str, member: Any, collection: Collection[Any]) -> None:
        logger.debug("Checking %s of %s contains %r", field, self._label(), member)
        if member not in collection:
            self._fail(MissingMemberError(field, member, list(collection)))

    def _expect_absent(self, field: str, member: Any, collection: Collection[Any]) -> None:
        logger.debug("Checking %s of %s lacks %r", field, self._label(), member)
        if member in collection:
            self._fail(UnexpectedMemberError(field, member, list(collection)))

    def _fail(self, error: AssertionFailure) -> NoReturn:
        logger.info("Assertion on %s failed: %s", self._label(), error)
        raise error

    def _label(self) -> str:
        return f"application {getattr(self._application, 'name', '?')!r}"


def assert_that(application: Application, **kwargs: Any) -> ApplicationAssert:
    """Shorthand for ``ApplicationAssert(application, ...)``."""
    return ApplicationAssert(application, **kwargs)
