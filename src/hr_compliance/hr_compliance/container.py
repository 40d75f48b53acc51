from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.classifier import AttendanceClassifier
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .compliance.accumulator import ComplianceAccumulator
from .compliance.policies import MonthlyLateCountPolicy, WeeklyLateMinutesPolicy
from .compliance.sink import EscalationSink, LoggingEscalationSink
from .core.constants import DEFAULT_SP1_MONTHLY_LATE_COUNT
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .leaves.mysql_leave_repository import MySQLLeaveQuotaRepository, MySQLLeaveRepository
from .leaves.quota import LeaveQuotaTracker
from .leaves.return_monitor import LeaveReturnMonitor
from .leaves.service import LeaveService
from .loans.mysql_loan_repository import MySQLLoanRepository
from .loans.service import LoanService
from .payroll.deductions import DeductionCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .schedules.resolver import ScheduleResolver
from .settings.mysql_settings_provider import MySQLSettingsProvider
from .settings.provider import SettingsProvider, StaticSettingsProvider


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: SettingsProvider

    employees_repo: MySQLEmployeeDirectory
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    quotas_repo: MySQLLeaveQuotaRepository
    loans_repo: MySQLLoanRepository
    payroll_repo: MySQLPayrollRepository

    classifier: AttendanceClassifier
    compliance: ComplianceAccumulator
    attendance_service: AttendanceService
    leave_service: LeaveService
    quota_tracker: LeaveQuotaTracker
    return_monitor: LeaveReturnMonitor
    loan_service: LoanService
    deduction_calculator: DeductionCalculator
    payroll_service: PayrollService


def build_settings(settings_module, conn: DatabaseConnection) -> SettingsProvider:
    """``SETTINGS_SOURCE=database`` reads system_settings; anything else uses the config module."""

    if str(getattr(settings_module, "SETTINGS_SOURCE", "static")).lower() == "database":
        return MySQLSettingsProvider(conn)

    rate = getattr(settings_module, "LATE_PENALTY_RATE_PER_MINUTE", None)
    return StaticSettingsProvider(
        late_penalty_rate_per_minute=Decimal(str(rate)) if rate not in (None, "") else None,
        sp1_weekly_late_minutes=getattr(settings_module, "SP1_WEEKLY_LATE_MINUTES", None),
        annual_leave_quota=getattr(settings_module, "ANNUAL_LEAVE_QUOTA", None),
    )


def build_container(
    *,
    db_config: dict,
    settings_module=None,
    sink: Optional[EscalationSink] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    settings = build_settings(settings_module, conn)

    employees_repo = MySQLEmployeeDirectory(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    quotas_repo = MySQLLeaveQuotaRepository(conn)
    loans_repo = MySQLLoanRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    classifier = AttendanceClassifier(ScheduleResolver())
    weekly = WeeklyLateMinutesPolicy(classifier, settings)
    monthly = MonthlyLateCountPolicy(
        int(getattr(settings_module, "SP1_MONTHLY_LATE_COUNT", DEFAULT_SP1_MONTHLY_LATE_COUNT))
    )
    compliance = ComplianceAccumulator(attendance_repo, sink or LoggingEscalationSink(), policies=(weekly, monthly))

    return_monitor = LeaveReturnMonitor(attendance_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        classifier,
        compliance,
        check_in_policies=(weekly,),
        check_out_policies=(monthly,),
        leaves=leaves_repo,
        return_monitor=return_monitor,
    )
    quota_tracker = LeaveQuotaTracker(quotas_repo, settings)
    leave_service = LeaveService(leaves_repo, employees_repo, quota_tracker, return_monitor)
    loan_service = LoanService(loans_repo, employees_repo)
    deduction_calculator = DeductionCalculator(loans_repo, attendance_repo, settings, classifier)
    payroll_service = PayrollService(payroll_repo, employees_repo, deduction_calculator)

    return Container(
        conn=conn,
        settings=settings,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        quotas_repo=quotas_repo,
        loans_repo=loans_repo,
        payroll_repo=payroll_repo,
        classifier=classifier,
        compliance=compliance,
        attendance_service=attendance_service,
        leave_service=leave_service,
        quota_tracker=quota_tracker,
        return_monitor=return_monitor,
        loan_service=loan_service,
        deduction_calculator=deduction_calculator,
        payroll_service=payroll_service,
    )
