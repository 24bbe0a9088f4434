"""Search analytics use case: day-window counts, top terms, CSV export."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.application.dtos.analytics import SearchLogEntry, SearchStats, TermCount
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ISearchLogRepository

TOP_TERMS = 10
CSV_HEADER = "Date,Time,Term,Category"
UNKNOWN_CATEGORY = "Unknown"


def _csv_line(entry: SearchLogEntry) -> str:
    ts = ensure_utc(entry.timestamp)
    date = ts.strftime("%Y-%m-%d") if ts else ""
    time = ts.strftime("%H:%M:%S") if ts else ""
    term = '"' + entry.term.replace('"', '""') + '"'
    return ",".join([date, time, term, entry.category or UNKNOWN_CATEGORY])


class SearchAnalyticsService:
    """Stats over the most recent search_logs window (UTC)."""

    def __init__(self, search_log_repo: "ISearchLogRepository", window: int = 1000) -> None:
        self.search_log_repo = search_log_repo
        self.window = window

    async def stats(self, now: datetime | None = None) -> SearchStats:
        """Counts for today, yesterday, last 7 and 30 days plus the top 10 terms.

        Today and yesterday compare UTC calendar dates; the 7 and 30 day
        windows are rolling from now. Terms are trimmed and upper-cased.
        """
        now = ensure_utc(now) or utc_now()
        today = now.date()
        yesterday = today - timedelta(days=1)
        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=30)

        entries = await self.search_log_repo.latest(self.window)
        counts = {"today": 0, "yesterday": 0, "week": 0, "month": 0}
        terms: Counter[str] = Counter()
        for entry in entries:
            ts = ensure_utc(entry.timestamp)
            if ts is None:
                continue
            if ts.date() == today:
                counts["today"] += 1
            if ts.date() == yesterday:
                counts["yesterday"] += 1
            if ts >= week_ago:
                counts["week"] += 1
            if ts >= month_ago:
                counts["month"] += 1
            term = entry.term.strip()
            if term:
                terms[term.upper()] += 1

        return SearchStats(
            today=counts["today"],
            yesterday=counts["yesterday"],
            last_7_days=counts["week"],
            last_30_days=counts["month"],
            total=len(entries),
            top_terms=[TermCount(term=t, count=c) for t, c in terms.most_common(TOP_TERMS)],
        )

    async def export_csv(self) -> str:
        """CSV of the window: Date,Time,Term,Category (UTC, term always quoted)."""
        entries = await self.search_log_repo.latest(self.window)
        return "\n".join([CSV_HEADER, *(_csv_line(e) for e in entries)]) + "\n"

    @staticmethod
    def export_filename(now: datetime | None = None) -> str:
        now = ensure_utc(now) or utc_now()
        return f"search_analytics_{now.date().isoformat()}.csv"
