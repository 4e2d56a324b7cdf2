import logging
from decimal import Decimal, ROUND_HALF_UP

from models.payroll import AttendanceInput, ProrationResult, SalaryComponents

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


class AttendanceProration:
    """Deduct pay for days not covered by attendance

    Worked, weekly-off, holiday and paid-leave days count as accounted.
    Anything left of the month is charged at the gross per-day rate.
    Overcounting is clamped to the month length.
    """

    def calculate(self, salary: SalaryComponents, attendance: AttendanceInput,
                  total_days: int) -> ProrationResult:
        total_days = max(int(total_days), 0)

        counted = (
            attendance.worked_payable_days
            + attendance.weekly_off
            + attendance.holiday
            + attendance.paid_leaves
        )
        accounted_days = min(counted, Decimal(total_days))
        if counted > total_days:
            logger.debug("Attendance overcount %s > %s days, clamped", counted, total_days)

        missing_days = max(Decimal(total_days) - accounted_days, Decimal('0'))

        if total_days > 0:
            per_day_rate = salary.gross_monthly / Decimal(total_days)
        else:
            per_day_rate = Decimal('0')

        prorated_deduction = (missing_days * per_day_rate).quantize(CENTS, rounding=ROUND_HALF_UP)

        logger.debug(
            "Proration: %s/%s days accounted, %s missing at %s/day -> %s",
            accounted_days, total_days, missing_days, per_day_rate, prorated_deduction
        )

        return ProrationResult(
            total_days=total_days,
            accounted_days=accounted_days,
            missing_days=missing_days,
            per_day_rate=per_day_rate,
            prorated_deduction=prorated_deduction,
        )
