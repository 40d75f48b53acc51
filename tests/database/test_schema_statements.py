from src.hr_compliance.hr_compliance.database.bootstrap import (
    SCHEMA_PATH,
    _strip_create_db_and_use,
    iter_sql_statements,
)


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = "-- header; comment\nINSERT INTO t VALUES ('a;b');\nSELECT 1;\nSELECT 2"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1", "SELECT 2"]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS hr;\nUSE hr;\nCREATE TABLE x (id INT);"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE x (id INT)"]


def test_bundled_schema_defines_every_table():
    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))))
    text = "\n".join(statements)
    for table in (
        "employees",
        "attendance_records",
        "leave_requests",
        "leave_quotas",
        "loans",
        "payroll_records",
        "payroll_loan_items",
        "system_settings",
    ):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in text
    assert "uq_attendance_employee_date" in text
