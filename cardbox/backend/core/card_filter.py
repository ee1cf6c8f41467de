"""
Card Filtering.

Narrows an already-fetched, already-ordered list of decoded cards by the
optional list predicates. Runs in memory after retrieval, so results do
not depend on what the database can query (tags are a JSON blob at rest).

Predicates:
    q       - case-insensitive substring of title or content
    type    - exact match; ignored unless a valid card type
    status  - exact match; ignored unless a valid card status
    tag     - exact membership in the card's tags

Every present predicate must match. Empty strings impose no constraint.
Input order is preserved.
"""

from collections.abc import Callable, Iterable

from cardbox.backend.models.card import CardStatus, CardType
from cardbox.backend.schemas.card import CardQuery, CardResponse

CardPredicate = Callable[[CardResponse], bool]

_CARD_TYPES = frozenset(t.value for t in CardType)
_CARD_STATUSES = frozenset(s.value for s in CardStatus)


def _matches_text(needle: str) -> CardPredicate:
    needle = needle.lower()

    def predicate(card: CardResponse) -> bool:
        return needle in card.title.lower() or needle in (card.content or "").lower()

    return predicate


def build_predicates(query: CardQuery) -> list[CardPredicate]:
    """
    Turn a query into the list of predicates it imposes.

    Args:
        query: List filters from the request

    Returns:
        Predicates to apply; empty when the query constrains nothing
    """
    predicates: list[CardPredicate] = []

    if query.q:
        predicates.append(_matches_text(query.q))

    if query.type and query.type in _CARD_TYPES:
        card_type = query.type
        predicates.append(lambda card: card.type == card_type)

    if query.status and query.status in _CARD_STATUSES:
        status = query.status
        predicates.append(lambda card: card.status == status)

    if query.tag:
        tag = query.tag
        predicates.append(lambda card: tag in card.tags)

    return predicates


def filter_cards(
    cards: Iterable[CardResponse],
    query: CardQuery,
) -> list[CardResponse]:
    """
    Keep the cards that satisfy every predicate in the query.

    Args:
        cards: Decoded cards, most recently updated first
        query: List filters

    Returns:
        Matching cards in input order
    """
    predicates = build_predicates(query)
    return [card for card in cards if all(p(card) for p in predicates)]
