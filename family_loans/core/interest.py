"""
Interest projection for loans.

Loans accrue simple interest on the original principal:

    current = principal * (1 + rate / 100 * years)

where years is whole elapsed days divided by 365.25. Everything here
is pure so the same numbers come out wherever it runs.
"""

from datetime import date, datetime, time, timedelta, UTC

DAYS_PER_YEAR = 365.25
ONE_DAY = timedelta(days=1)


def as_utc_datetime(value: date | datetime) -> datetime:
    """Dates become midnight UTC; naive datetimes are taken as UTC"""
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    return datetime.combine(value, time.min, tzinfo=UTC)


def elapsed_days(loan_date: date | datetime, as_of: date | datetime) -> int:
    """Whole days from loan_date to as_of, floored (negative if as_of is earlier)"""
    return (as_utc_datetime(as_of) - as_utc_datetime(loan_date)) // ONE_DAY


def project_current_amount(
    principal: float,
    annual_rate_percent: float | None,
    loan_date: date | datetime,
    as_of: date | datetime | None = None,
) -> float:
    """
    Project what a loan is worth on a given day.

    Args:
        principal: Amount originally borrowed
        annual_rate_percent: Annual simple interest rate in percent; None or 0
            means no interest
        loan_date: Day the loan was taken
        as_of: Day to project to; defaults to now

    Returns:
        Principal plus accrued simple interest. A loan dated after as_of
        projects below principal; that is not treated as an error.
    """
    principal = float(principal)
    if not annual_rate_percent:
        return principal

    if as_of is None:
        as_of = datetime.now(UTC)

    years = elapsed_days(loan_date, as_of) / DAYS_PER_YEAR
    return principal * (1 + (float(annual_rate_percent) / 100) * years)
