"""HR compliance engine.

Turns time-clock punches, leave requests and loan records into compliance
signals (lateness, SP1 escalations, late return from leave) and payroll
numbers (deductions, net salary). Organized by feature module with
service/repository layers; persistence lives behind Protocol repositories.
"""
