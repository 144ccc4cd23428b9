"""Smart-search query parsing.

A query mixes ``field:value`` filters with free text, e.g.
``"stage:proposal country:chile acme"``. Every token containing a colon is
consumed as a filter candidate; tokens whose field is not recognized are
dropped rather than searched as literal text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SEARCH_FIELDS = ("country", "stage", "company", "owner", "tag")


@dataclass(frozen=True)
class SearchQuery:
    fields: dict[str, str] = field(default_factory=dict)
    free_text: str = ""

    @property
    def free_text_terms(self) -> list[str]:
        return self.free_text.split()

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.free_text

    def get(self, name: str) -> str | None:
        return self.fields.get(name)


def parse_search_query(raw: str | None) -> SearchQuery:
    """Split a raw search string into recognized field filters and free text."""
    if not raw:
        return SearchQuery()

    fields: dict[str, str] = {}
    terms: list[str] = []
    for token in raw.lower().split():
        if ":" not in token:
            terms.append(token)
            continue
        name, _, value = token.partition(":")
        # "stage:" while the user is still typing filters nothing.
        if name in SEARCH_FIELDS and value:
            fields[name] = value

    return SearchQuery(fields=fields, free_text=" ".join(terms))
