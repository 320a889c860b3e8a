"""Filter engine over stored timeline events.

``query`` is pure: it never mutates the events, the store or the
filters it is given.
"""

from collections.abc import Iterable

from fltr.models.event import ActiveFilters, Event


def matches_keywords(event: Event, filters: ActiveFilters, search_term: str) -> bool:
    """Keyword/search predicate.

    With no keywords and no search term everything passes. Otherwise an
    event passes when any configured keyword occurs in its description,
    or the search term occurs in its detail or its description. The
    empty string occurs in every detail, so keywords only narrow the
    view while a search term is typed.
    """
    if not filters.keywords and not search_term:
        return True

    description = event.event.lower()
    term = search_term.lower()

    if any(keyword.lower() in description for keyword in filters.keywords):
        return True
    if term in event.detail.lower() or term in description:
        return True
    return False


def matches_severity(event: Event, filters: ActiveFilters) -> bool:
    """Severity predicate."""
    return event.severity in filters.severities


def matches_host(event: Event, filters: ActiveFilters) -> bool:
    """Host predicate; a configured host may equal or occur in the source."""
    if not filters.hosts:
        return True

    source = event.source.lower()
    return any(
        source == host.lower() or host.lower() in source for host in filters.hosts
    )


def query(
    events: Iterable[Event],
    filters: ActiveFilters,
    search_term: str = "",
) -> list[Event]:
    """Return the events passing every predicate, in original order.

    Args:
        events: Events to filter (typically the whole store)
        filters: Active filter configuration
        search_term: Ad hoc search box text

    Returns:
        Matching events
    """
    return [
        event
        for event in events
        if matches_keywords(event, filters, search_term)
        and matches_severity(event, filters)
        and matches_host(event, filters)
    ]
