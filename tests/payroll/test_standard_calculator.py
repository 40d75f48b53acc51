from decimal import Decimal

import pytest

from src.hr_compliance.hr_compliance.core.exceptions import ValidationError
from src.hr_compliance.hr_compliance.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_compliance.hr_compliance.payroll.model import PayrollPeriod


def test_net_salary_is_exact():
    calc = StandardPayrollCalculator()
    net = calc.net_salary(
        base_salary=Decimal("5000000.10"),
        allowances=Decimal("300000.20"),
        deductions=Decimal("26000"),
        overtime_hours=Decimal("2.5"),
        overtime_rate=Decimal("40000"),
    )
    assert net == Decimal("5374000.30")


def test_net_salary_may_go_negative():
    calc = StandardPayrollCalculator()
    net = calc.net_salary(
        base_salary=Decimal("100"),
        allowances=Decimal("0"),
        deductions=Decimal("150"),
        overtime_hours=Decimal("0"),
        overtime_rate=Decimal("0"),
    )
    assert net == Decimal("-50")


def test_period_bounds_and_validation():
    period = PayrollPeriod(month=2, year=2024)
    assert str(period) == "2024-02"
    assert period.last_day.day == 29
    with pytest.raises(ValidationError):
        PayrollPeriod(month=13, year=2024)
    with pytest.raises(ValidationError):
        PayrollPeriod(month=0, year=2024)
