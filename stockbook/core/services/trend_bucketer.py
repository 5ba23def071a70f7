"""
Weekly trend series for the dashboard chart.

Each product's lifetime revenue, profit and sold units are attributed to
the calendar week (Sunday start) in which the product was created, not to
the weeks in which its sales happened. The chart therefore shows when
stock was added.
"""

from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from stockbook.core.entities.analytics import TrendSeries
from stockbook.core.entities.product import Product

DEFAULT_TREND_WEEKS = 6
PLACEHOLDER_LABEL = "Week 1"


def week_start(moment: datetime, tz: tzinfo | None = None) -> date:
    """
    Sunday that starts the week containing ``moment``.

    The date is taken in ``tz``, or in the host's local zone when None.
    """
    local_day = moment.astimezone(tz).date()
    return local_day - timedelta(days=(local_day.weekday() + 1) % 7)


def format_week_label(day: date) -> str:
    return f"{day.month}/{day.day}"


def compute_trend(
    products: Sequence[Product],
    weeks: int = DEFAULT_TREND_WEEKS,
    tz: tzinfo | None = None,
) -> TrendSeries:
    """
    Bucket products by creation week and return the latest ``weeks`` buckets.

    Only weeks that contain at least one product produce a bucket.
    With no products at all a single zeroed placeholder bucket is returned,
    so charts always have a point to draw.
    """
    if not products:
        return TrendSeries(
            labels=[PLACEHOLDER_LABEL],
            revenue=[0.0],
            profit=[0.0],
            sold_stocks=[0],
        )

    buckets: dict[date, list] = {}
    for product in products:
        key = week_start(product.created_at, tz)
        bucket = buckets.setdefault(key, [0.0, 0.0, 0])
        bucket[0] += product.revenue
        bucket[1] += product.profit
        bucket[2] += product.sold_units

    latest = sorted(buckets)[-weeks:]
    return TrendSeries(
        labels=[format_week_label(day) for day in latest],
        revenue=[buckets[day][0] for day in latest],
        profit=[buckets[day][1] for day in latest],
        sold_stocks=[buckets[day][2] for day in latest],
    )
