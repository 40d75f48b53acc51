from datetime import date
from decimal import Decimal

import pytest

from src.hr_compliance.hr_compliance.core.enums import LoanStatus
from src.hr_compliance.hr_compliance.core.exceptions import DuplicateOperation, PolicyViolation, ValidationError
from src.hr_compliance.hr_compliance.loans.model import Loan
from src.hr_compliance.hr_compliance.loans.service import LoanService
from tests.fakes import InMemoryEmployees, InMemoryLoans, employee


def _service():
    loans = InMemoryLoans()
    return LoanService(loans, InMemoryEmployees(employee(1))), loans


def test_create_starts_pending_with_full_balance():
    svc, _ = _service()
    loan = svc.create(employee_id=1, amount="1000000", installment_amount="250000", start_date=date(2024, 1, 1))
    assert loan.status == LoanStatus.PENDING
    assert loan.remaining_amount == Decimal("1000000")


def test_installment_larger_than_amount_rejected():
    svc, _ = _service()
    with pytest.raises(PolicyViolation):
        svc.create(employee_id=1, amount=100, installment_amount=200, start_date=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        svc.create(employee_id=1, amount=0, installment_amount=0, start_date=date(2024, 1, 1))


def test_decide_only_once():
    svc, _ = _service()
    loan = svc.create(employee_id=1, amount=100, installment_amount=50, start_date=date(2024, 1, 1))
    assert svc.approve(loan.loan_id).status == LoanStatus.APPROVED
    with pytest.raises(DuplicateOperation):
        svc.reject(loan.loan_id)


def _approved(remaining, installment="100"):
    return Loan(
        loan_id=1,
        employee_id=1,
        amount=Decimal("250"),
        remaining_amount=Decimal(remaining),
        installment_amount=Decimal(installment),
        start_date=date(2024, 1, 1),
        status=LoanStatus.APPROVED,
    )


def test_installment_reduces_balance():
    loan = _approved("250").after_installment(Decimal("100"))
    assert loan.remaining_amount == Decimal("150")
    assert loan.status == LoanStatus.APPROVED


def test_last_installment_floors_at_zero_and_pays_off():
    loan = _approved("50").after_installment(Decimal("100"))
    assert loan.remaining_amount == Decimal("0")
    assert loan.status == LoanStatus.PAID_OFF
    assert not loan.is_active_for(date(2024, 2, 1))


def test_loan_not_started_is_not_active():
    assert not _approved("250").is_active_for(date(2023, 12, 1))
    assert _approved("250").is_active_for(date(2024, 1, 1))
