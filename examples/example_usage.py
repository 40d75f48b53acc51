"""Example: using the service layer directly.

Applies the schema if AUTO_INIT_DB is set, then prints one employee's
deductions for the current payroll period.
"""

from datetime import date

from src.hr_compliance.hr_compliance.main import create_engine
from src.hr_compliance.hr_compliance.payroll.model import PayrollPeriod


def main():
    container = create_engine()
    summary = container.deduction_calculator.compute(1, PayrollPeriod.of(date.today()))
    print(summary.total)
    for line in summary.breakdown:
        print(" -", line)


if __name__ == "__main__":
    main()
