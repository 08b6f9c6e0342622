"""Value objects — locator grammars and their decomposition results.

A locator either conforms to its grammar, yielding one captured string per
named slot, or it does not.  The two outcomes are distinct types so callers
can tell "wrong shape" apart from "right shape, wrong value".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable

DEFAULT_WEB_SCHEMES: tuple[str, ...] = ("http", "https")


@dataclass(frozen=True, slots=True)
class Conforms:
    """A locator that matched its grammar."""

    grammar: str
    names: tuple[str, ...]
    slots: tuple[str, ...]

    def slot(self, name: str) -> str:
        """Return the captured value of the slot called *name*."""
        return self.slots[self.names.index(name)]

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True, slots=True)
class NotConforming:
    """A locator that does not have the shape its grammar requires."""

    grammar: str
    form: str
    text: Any


Decomposition = Conforms | NotConforming


@dataclass(frozen=True, slots=True)
class LocatorGrammar:
    """A fixed textual shape with named capture slots.

    The whole locator must match; partial matches do not conform.
    The slot count is fixed when the grammar is built, so every
    :class:`Conforms` result has between *min_slots* and *max_slots* slots.
    """

    name: str
    form: str
    pattern: re.Pattern[str]
    min_slots: int = 0
    max_slots: int | None = None

    def __post_init__(self) -> None:
        groups = self.pattern.groups
        if groups < self.min_slots or (self.max_slots is not None and groups > self.max_slots):
            msg = f"{self.name} grammar captures {groups} slots, outside the allowed range."
            raise ValueError(msg)

    @property
    def slot_names(self) -> tuple[str, ...]:
        by_index = sorted(self.pattern.groupindex.items(), key=lambda item: item[1])
        return tuple(slot for slot, _ in by_index)

    def decompose(self, text: Any) -> Decomposition:
        """Split *text* into its slots.  Never raises for malformed input."""
        if not isinstance(text, str):
            return NotConforming(grammar=self.name, form=self.form, text=text)
        match = self.pattern.fullmatch(text)
        if match is None:
            return NotConforming(grammar=self.name, form=self.form, text=text)
        return Conforms(grammar=self.name, names=self.slot_names, slots=match.groups())


# ── Grammars ────────────────────────────────────────────────────────────────

GIT_LOCATOR = LocatorGrammar(
    name="git url",
    form="ssh://{uuid}@{name}-{domain_id}.{suffix}/~/git/{repo_name}.git/",
    pattern=re.compile(
        r"ssh://(?P<uuid>[^@/]+)@(?P<name>[^./]+)-(?P<domain_id>[^./]+)\.(?P<suffix>[^/]+)"
        r"/~/git/(?P<repo_name>[^/]+)\.git/"
    ),
    min_slots=5,
    max_slots=5,
)


def normalize_web_schemes(schemes: Iterable[str]) -> tuple[str, ...]:
    """Strip and lowercase *schemes*, dropping blanks.

    Raises ``TypeError`` for a bare string (which would otherwise be split
    into single letters) and ``ValueError`` if no scheme is left.
    """
    if isinstance(schemes, str):
        msg = f"web schemes must be a collection of strings, not the string {schemes!r}."
        raise TypeError(msg)
    normalized = tuple(s.strip().lower() for s in schemes if s.strip())
    if not normalized:
        msg = "web schemes must name at least one URL scheme."
        raise ValueError(msg)
    return normalized


@lru_cache(maxsize=8)
def web_locator_grammar(schemes: Iterable[str] = DEFAULT_WEB_SCHEMES) -> LocatorGrammar:
    """Build the application-URL grammar accepting the given URL schemes.

    *schemes* must be hashable (a tuple) since grammars are cached per scheme set.
    """
    schemes = normalize_web_schemes(schemes)
    alternatives = "|".join(re.escape(s) for s in sorted(schemes, key=len, reverse=True))
    return LocatorGrammar(
        name="application url",
        form="{" + "|".join(schemes) + "}://{name}-{domain_id}.{suffix}/{path}",
        pattern=re.compile(
            rf"(?:{alternatives})://(?P<name>[^./]+)-(?P<domain_id>[^./]+)\.(?P<suffix>[^/]+)"
            r"/(?P<path>.*)",
            re.DOTALL,
        ),
        min_slots=3,
    )


WEB_LOCATOR = web_locator_grammar(DEFAULT_WEB_SCHEMES)


def decompose_web_locator(text: Any) -> Decomposition:
    """Decompose an application URL into ``name, domain_id, suffix, path``."""
    return WEB_LOCATOR.decompose(text)


def decompose_git_locator(text: Any) -> Decomposition:
    """Decompose a git URL into ``uuid, name, domain_id, suffix, repo_name``."""
    return GIT_LOCATOR.decompose(text)
