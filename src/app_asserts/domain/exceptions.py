"""Domain exception hierarchy.

Logical check failures derive from :class:`AssertionError` so that any test
runner reports them as ordinary assertion failures.  A broken fixture is a
setup problem and deliberately does not.
"""

from __future__ import annotations

from typing import Any


class AppAssertError(Exception):
    """Base exception for the entire package."""


class AssertionFailure(AppAssertError, AssertionError):
    """A check ran against a well-formed fixture and did not hold."""


class Placeholder:
    """An expected value that is a description, printed without quotes."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return self.text


A_COLLECTION = Placeholder("a collection")
A_VALUE = Placeholder("a value")


# ── Locator shape ───────────────────────────────────────────────────────────


class GrammarMismatchError(AssertionFailure):
    """A locator does not conform to its grammar at all."""

    def __init__(self, locator: str, form: str, actual: Any) -> None:
        self.locator = locator
        self.form = form
        self.actual = actual
        super().__init__(f"expected a valid {locator} of form {form}, got {actual!r}")


# ── Field values ────────────────────────────────────────────────────────────


class FieldMismatchError(AssertionFailure):
    """A field (direct or decomposed from a locator) has the wrong value."""

    def __init__(self, field: str, expected: Any, actual: Any) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"expected `{self.field}`=`{self.expected!r}`, got `{self.actual!r}`"


class MissingMemberError(FieldMismatchError):
    """A collection lacks a member it should contain."""

    def __init__(self, field: str, member: Any, actual: Any) -> None:
        self.member = member
        super().__init__(field, member, actual)

    def _describe(self) -> str:
        return f"expected `{self.field}` to contain `{self.member!r}`, got `{self.actual!r}`"


class UnexpectedMemberError(FieldMismatchError):
    """A collection contains a member it should not."""

    def __init__(self, field: str, member: Any, actual: Any) -> None:
        self.member = member
        super().__init__(field, member, actual)

    def _describe(self) -> str:
        return f"expected `{self.field}` not to contain `{self.member!r}`, got `{self.actual!r}`"


# ── Fixture errors ──────────────────────────────────────────────────────────


class BrokenFixtureError(AppAssertError):
    """A required link of the application → domain → user → connection chain is missing."""

    def __init__(self, link: str) -> None:
        self.link = link
        super().__init__(f"Broken fixture: `{link}` is None")
