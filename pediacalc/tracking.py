# tracking.py
"""
Day-count helpers for the ward board: antibiotic courses, respiratory
score trends, length of stay and pediatric age labels.

Every function that depends on "today" takes an optional `today` so the
caller (and the tests) can pin the clock. Dates may be datetime.date or
ISO "YYYY-MM-DD" strings.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from pediacalc.constants import TRACKING_CONSTANTS, ProgressBand, Trend
from pediacalc.models import AntibioticTracking, RespiratoryScore, ScoreDelta


DateLike = Union[date, str]


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _today(today: Optional[DateLike]) -> date:
    return as_date(today) if today is not None else date.today()


# --- Antibiotic courses ---

def current_day(start_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Day N of treatment; the start date is day 1. Never below 1."""
    elapsed = (_today(today) - as_date(start_date)).days
    return max(elapsed + 1, 1)


def end_date(start_date: DateLike, planned_days: int) -> date:
    """Last day of the course (inclusive)."""
    return as_date(start_date) + timedelta(days=planned_days - 1)


def progress_percent(current: int, planned_days: int) -> float:
    if planned_days <= 0:
        return 100.0
    return min(current / planned_days * 100.0, 100.0)


def progress_band(current: int, planned_days: int) -> ProgressBand:
    progress = progress_percent(current, planned_days)
    if progress < TRACKING_CONSTANTS.EARLY_PROGRESS_PCT:
        return ProgressBand.EARLY
    if progress < TRACKING_CONSTANTS.MID_PROGRESS_PCT:
        return ProgressBand.MID
    return ProgressBand.LATE


def is_ending_soon(current: int, planned_days: int) -> bool:
    remaining = planned_days - current
    return 0 < remaining <= TRACKING_CONSTANTS.ENDING_SOON_DAYS


def has_ended(current: int, planned_days: int) -> bool:
    return current >= planned_days


def track_antibiotic(name: str, start_date: DateLike, planned_days: int,
                     today: Optional[DateLike] = None) -> AntibioticTracking:
    start = as_date(start_date)
    return AntibioticTracking(
        name=name,
        start_date=start,
        planned_days=planned_days,
        current_day=current_day(start, today),
        end_date=end_date(start, planned_days),
    )


def update_antibiotic_tracking(courses: Iterable[AntibioticTracking],
                               today: Optional[DateLike] = None) -> List[AntibioticTracking]:
    """Refresh current_day on stored courses (e.g. loaded from the record)."""
    return [track_antibiotic(c.name, c.start_date, c.planned_days, today) for c in courses]


def format_antibiotic_display(course: AntibioticTracking) -> str:
    return f"D{course.current_day}/{course.planned_days}"


# --- Respiratory scores ---

def score_delta(score: RespiratoryScore) -> ScoreDelta:
    """Lower scores are better: a negative delta is an improvement."""
    delta = score.current - score.at_admission
    if delta < 0:
        return ScoreDelta(delta, Trend.DOWN, "green")
    if delta > 0:
        return ScoreDelta(delta, Trend.UP, "red")
    return ScoreDelta(delta, Trend.FLAT, "gray")


# --- Length of stay ---

def days_hospitalized(admission_date: DateLike, discharge_date: Optional[DateLike] = None,
                      today: Optional[DateLike] = None) -> int:
    end = as_date(discharge_date) if discharge_date is not None else _today(today)
    return max((end - as_date(admission_date)).days, 0)


def hospitalization_color(days: int) -> str:
    # Display only; not a clinical judgement
    for upper_bound, color in TRACKING_CONSTANTS.STAY_COLORS:
        if days < upper_bound:
            return color
    return TRACKING_CONSTANTS.LONG_STAY_COLOR


def format_days_hospitalized(days: int) -> str:
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day"
    return f"{days} days"


# --- Pediatric age ---

def _months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def _plural(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def format_pediatric_age(birth_date: DateLike, today: Optional[DateLike] = None) -> str:
    """
    0-28 days in days, up to 24 months in months, then years and months.
    """
    born = as_date(birth_date)
    now = _today(today)

    total_days = (now - born).days
    if total_days <= TRACKING_CONSTANTS.NEONATAL_DAYS:
        return "Newborn" if total_days == 0 else _plural(total_days, "day", "days")

    total_months = _months_between(born, now)
    if total_months <= TRACKING_CONSTANTS.INFANT_MONTHS:
        return _plural(total_months, "month", "months")

    years, months = divmod(total_months, 12)
    if months == 0:
        return _plural(years, "year", "years")
    return f"{_plural(years, 'year', 'years')} and {_plural(months, 'month', 'months')}"


def format_pediatric_age_short(birth_date: DateLike, today: Optional[DateLike] = None) -> str:
    born = as_date(birth_date)
    now = _today(today)

    total_days = (now - born).days
    if total_days <= TRACKING_CONSTANTS.NEONATAL_DAYS:
        return "NB" if total_days == 0 else f"{total_days}d"

    total_months = _months_between(born, now)
    if total_months <= TRACKING_CONSTANTS.INFANT_MONTHS:
        return f"{total_months}m"

    years, months = divmod(total_months, 12)
    return f"{years}y" if months == 0 else f"{years}y {months}m"
