from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_compliance.hr_compliance.core.enums import AttendanceStatus, LoanStatus, PayrollStatus
from src.hr_compliance.hr_compliance.core.exceptions import (
    AccountNotLinked,
    AlreadyPaid,
    DuplicatePending,
    NotFound,
    PolicyViolation,
    StoreError,
    ValidationError,
)
from src.hr_compliance.hr_compliance.loans.model import Loan
from src.hr_compliance.hr_compliance.payroll.deductions import DeductionCalculator
from src.hr_compliance.hr_compliance.payroll.model import PayrollPeriod
from src.hr_compliance.hr_compliance.payroll.service import PayrollService
from tests.fakes import (
    BrokenAttendance,
    FlakyLoans,
    InMemoryAttendance,
    InMemoryEmployees,
    InMemoryLoans,
    InMemoryPayroll,
    employee,
)

JANUARY = PayrollPeriod(month=1, year=2024)


def _service(*, attendance=None, loans=None, payroll=None):
    attendance = attendance or InMemoryAttendance()
    loans = loans or InMemoryLoans()
    employees = InMemoryEmployees(employee(1), employee(2, user_id=None))
    payroll = payroll or InMemoryPayroll(loans)
    svc = PayrollService(payroll, employees, DeductionCalculator(loans, attendance))
    return svc, payroll


def test_create_computes_exact_net_salary():
    svc, _ = _service()
    record = svc.create(1, JANUARY, "5000000", allowances="250000.50", deductions="26000",
                        overtime_hours="3", overtime_rate="45000")
    assert record.status == PayrollStatus.PENDING
    assert record.net_salary == Decimal("5359000.50")


def test_negative_amounts_rejected():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.create(1, JANUARY, "-1")
    with pytest.raises(ValidationError):
        svc.create(1, JANUARY, "100", allowances="abc")


def test_employee_without_account_cannot_get_payroll():
    svc, _ = _service()
    with pytest.raises(AccountNotLinked):
        svc.create(2, JANUARY, 100)


def test_second_pending_payroll_rejected():
    svc, _ = _service()
    svc.create(1, JANUARY, 100)
    with pytest.raises(DuplicatePending):
        svc.create(1, JANUARY, 100)
    # a different month is fine
    svc.create(1, PayrollPeriod(month=2, year=2024), 100)


def test_paid_period_reported_as_already_paid():
    svc, _ = _service()
    record = svc.create(1, JANUARY, 100)
    svc.mark_as_paid(record.payroll_id, date(2024, 2, 1))
    with pytest.raises(AlreadyPaid):
        svc.create(1, JANUARY, 100)


def test_cancelled_period_can_be_recreated():
    svc, _ = _service()
    first = svc.create(1, JANUARY, 100)
    assert svc.cancel(first.payroll_id).status == PayrollStatus.CANCELLED
    second = svc.create(1, JANUARY, 120)
    assert second.payroll_id != first.payroll_id


def test_only_pending_records_change_status():
    svc, _ = _service()
    record = svc.create(1, JANUARY, 100)
    paid = svc.mark_as_paid(record.payroll_id, date(2024, 2, 1))
    assert paid.pay_date == date(2024, 2, 1)
    with pytest.raises(PolicyViolation):
        svc.mark_as_paid(record.payroll_id)
    with pytest.raises(PolicyViolation):
        svc.cancel(record.payroll_id)
    with pytest.raises(NotFound):
        svc.cancel(999)


def test_create_for_period_uses_salary_and_deductions():
    attendance = InMemoryAttendance()
    attendance.punch(1, datetime(2024, 1, 10, 8, 10), AttendanceStatus.LATE)
    loans = InMemoryLoans(
        Loan(
            loan_id=1,
            employee_id=1,
            amount=Decimal("300000"),
            remaining_amount=Decimal("300000"),
            installment_amount=Decimal("200000"),
            start_date=date(2023, 12, 1),
            status=LoanStatus.APPROVED,
        )
    )
    svc, _ = _service(attendance=attendance, loans=loans)

    draft = svc.create_for_period(1, JANUARY, allowances="100000")
    assert draft.deductions.total == Decimal("205000")
    assert draft.record.deductions == Decimal("205000")
    assert draft.record.net_salary == Decimal("4895000")

    svc.mark_as_paid(draft.record.payroll_id, date(2024, 2, 1))
    assert loans.get_by_id(1).remaining_amount == Decimal("100000")
    assert loans.get_by_id(1).status == LoanStatus.APPROVED


def test_create_for_period_writes_nothing_when_reads_fail():
    svc, payroll = _service(attendance=BrokenAttendance())
    with pytest.raises(StoreError):
        svc.create_for_period(1, JANUARY)
    assert payroll.by_id == {}


def _loan(loan_id=1, *, remaining="300000", installment="200000"):
    return Loan(
        loan_id=loan_id,
        employee_id=1,
        amount=Decimal("300000"),
        remaining_amount=Decimal(remaining),
        installment_amount=Decimal(installment),
        start_date=date(2023, 12, 1),
        status=LoanStatus.APPROVED,
    )


def test_paying_drains_only_loans_deducted_on_the_record():
    loans = InMemoryLoans()
    svc, _ = _service(loans=loans)
    draft = svc.create_for_period(1, JANUARY)
    assert draft.deductions.total == Decimal("0")

    # approved after the deductions were computed
    loans.by_id[1] = _loan(1)
    svc.mark_as_paid(draft.record.payroll_id, date(2024, 2, 1))
    assert loans.get_by_id(1).remaining_amount == Decimal("300000")


def test_paying_records_loan_items_and_pays_off_last_installment():
    loans = InMemoryLoans(_loan(1), _loan(2, remaining="50000", installment="100000"))
    svc, payroll = _service(loans=loans)
    draft = svc.create_for_period(1, JANUARY)

    assert [i.loan_id for i in payroll.get_by_id(draft.record.payroll_id).loan_items] == [1, 2]
    svc.mark_as_paid(draft.record.payroll_id, date(2024, 2, 1))
    assert loans.get_by_id(1).remaining_amount == Decimal("100000")
    assert loans.get_by_id(2).remaining_amount == Decimal("0")
    assert loans.get_by_id(2).status == LoanStatus.PAID_OFF


def test_failed_loan_drain_keeps_record_pending_and_retry_works():
    loans = FlakyLoans(_loan(1))
    loans.broken = False
    svc, payroll = _service(loans=loans)
    draft = svc.create_for_period(1, JANUARY)

    loans.broken = True
    with pytest.raises(StoreError):
        svc.mark_as_paid(draft.record.payroll_id, date(2024, 2, 1))
    assert payroll.get_by_id(draft.record.payroll_id).status == PayrollStatus.PENDING
    assert loans.by_id[1].remaining_amount == Decimal("300000")

    loans.broken = False
    assert svc.mark_as_paid(draft.record.payroll_id, date(2024, 2, 1)).status == PayrollStatus.PAID
    assert loans.get_by_id(1).remaining_amount == Decimal("100000")


class CountingPayroll(InMemoryPayroll):
    def __init__(self, loans=None):
        super().__init__(loans)
        self.lookups = 0

    def exists_for_period(self, employee_id, period, exclude_statuses=()) -> bool:
        self.lookups += 1
        return super().exists_for_period(employee_id, period, exclude_statuses)


def test_create_for_period_checks_duplicates_once():
    payroll = CountingPayroll()
    svc, _ = _service(payroll=payroll)
    svc.create_for_period(1, JANUARY)
    assert payroll.lookups == 2
