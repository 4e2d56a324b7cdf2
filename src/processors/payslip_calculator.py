import logging
from typing import Mapping, Optional

from models.payroll import (
    DeductionOverrides, PayslipComputation, ProrationResult, SalaryComponents
)

logger = logging.getLogger(__name__)


class PayslipCalculator:
    """Combine salary components and deduction overrides into payslip totals"""

    def calculate(self, salary: SalaryComponents,
                  overrides: Optional[DeductionOverrides] = None,
                  proration: Optional[ProrationResult] = None) -> PayslipComputation:
        """Pure calculation, identical inputs give identical output"""
        if overrides is not None:
            salary = salary.replace(**overrides.to_dict())

        total_earnings = salary.basic_salary + salary.hra + salary.other_allowances
        total_deductions = (
            salary.pf_deduction
            + salary.esi_deduction
            + salary.professional_tax
            + salary.other_deductions
        )
        # Not clamped, deductions may exceed earnings
        net_payable = total_earnings - total_deductions

        logger.debug("Earnings %s - deductions %s = net %s", total_earnings, total_deductions, net_payable)

        return PayslipComputation(
            salary=salary,
            total_earnings=total_earnings,
            total_deductions=total_deductions,
            net_payable=net_payable,
            proration=proration,
        )

    def calculate_from_mapping(self, values: Mapping[str, object]) -> PayslipComputation:
        """Calculate from raw field values, invalid entries count as 0"""
        salary = SalaryComponents.from_mapping(values)
        return self.calculate(salary)
