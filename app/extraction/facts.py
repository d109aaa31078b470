"""Weak-signal fact extraction from normalized document text."""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

_YEAR_RE = re.compile(r"\b(20\d{2})\b")

EARLIEST_YEAR = 2020
PROJECTION_HORIZON_YEARS = 20

FactProbe = Callable[[str, str, int], dict[str, object]]


def _candidate_years(text: str, filename: str) -> list[int]:
    return [int(m.group(1)) for source in (text, filename) for m in _YEAR_RE.finditer(source)]


def extract_year(
    text: str,
    filename: str,
    *,
    projection: bool,
    current_year: int,
) -> int | None:
    """Pick the document year from year-like tokens in *text* and *filename*.

    Historical mode keeps ``[2020, current_year]`` and returns the most recent
    year. Projection mode widens the window to ``current_year + 20`` and
    prefers the furthest year that is not in the past, falling back to the
    latest candidate of any year.
    """
    candidates = _candidate_years(text, filename)
    if not projection:
        past = [y for y in candidates if EARLIEST_YEAR <= y <= current_year]
        return max(past) if past else None

    upper = current_year + PROJECTION_HORIZON_YEARS
    in_window = [y for y in candidates if EARLIEST_YEAR <= y <= upper]
    if not in_window:
        return None
    future = [y for y in in_window if y >= current_year]
    return max(future) if future else max(in_window)


def historical_year_probe(text: str, filename: str, current_year: int) -> dict[str, object]:
    return {"year": extract_year(text, filename, projection=False, current_year=current_year)}


def projection_year_probe(text: str, filename: str, current_year: int) -> dict[str, object]:
    return {
        "projection_year": extract_year(
            text, filename, projection=True, current_year=current_year
        )
    }


DEFAULT_PROBES: tuple[FactProbe, ...] = (historical_year_probe, projection_year_probe)


@dataclass(frozen=True)
class ExtractedFacts:
    year: int | None = None
    projection_year: int | None = None
    extras: dict[str, object] = field(default_factory=dict)


class FactExtractor:
    """Runs a tuple of probes and merges their findings.

    Probes are callables ``(text, filename, current_year) -> dict``. The
    ``year`` and ``projection_year`` keys feed the typed fields; anything
    else lands in ``extras``.
    """

    def __init__(self, probes: tuple[FactProbe, ...] = DEFAULT_PROBES) -> None:
        self._probes = probes

    def extract(self, text: str, filename: str, current_year: int) -> ExtractedFacts:
        found: dict[str, object] = {}
        for probe in self._probes:
            found.update(probe(text, filename, current_year))
        year = found.pop("year", None)
        projection_year = found.pop("projection_year", None)
        return ExtractedFacts(
            year=year if isinstance(year, int) else None,
            projection_year=projection_year if isinstance(projection_year, int) else None,
            extras=found,
        )
