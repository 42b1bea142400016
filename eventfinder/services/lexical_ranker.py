"""Field-weighted keyword ranking.

Each query token scores once, at the first field it is found in (name,
then summary, category, price label, anywhere else).  The whole query
appearing verbatim earns a phrase bonus.  Events that match no token at all
are dropped.  Sorting is stable so equal scores keep candidate order.
"""

from __future__ import annotations

from typing import Sequence

from eventfinder.models.event import Event

NAME_WEIGHT = 15
SUMMARY_WEIGHT = 10
CATEGORY_WEIGHT = 8
PRICE_WEIGHT = 5
OTHER_WEIGHT = 1
PHRASE_BONUS = 25


def tokenize(query: str) -> list[str]:
    return [token for token in query.lower().split() if token]


def score_event(event: Event, tokens: Sequence[str], phrase: str) -> int:
    """Score one event; 0 means no token matched."""
    text = event.search_text()
    name = event.event_name.lower()
    summary = event.event_summary.lower()
    category = event.event_category.lower()
    price = event.price_label.lower()

    score = 0
    matched = 0
    for token in tokens:
        if token not in text:
            continue
        matched += 1
        if token in name:
            score += NAME_WEIGHT
        elif token in summary:
            score += SUMMARY_WEIGHT
        elif token in category:
            score += CATEGORY_WEIGHT
        elif token in price:
            score += PRICE_WEIGHT
        else:
            score += OTHER_WEIGHT

    if matched == 0:
        return 0
    if phrase and phrase in text:
        score += PHRASE_BONUS
    return score


def rank_events(query: str, events: Sequence[Event]) -> list[Event]:
    """Rank *events* against *query*, best first.

    A query with no tokens returns the input unchanged.
    """
    tokens = tokenize(query)
    if not tokens:
        return list(events)

    phrase = query.strip().lower()
    scored = [(score_event(event, tokens, phrase), event) for event in events]
    scored = [pair for pair in scored if pair[0] > 0]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [event for _, event in scored]
