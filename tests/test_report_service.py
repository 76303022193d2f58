import base64
from io import BytesIO

import pytest
from openpyxl import load_workbook

from database import ATTENDANCE, HOLIDAYS, USERS
from models.report import Highlight
from utils.exceptions import MalformedInput, RecordNotFound

from conftest import ist, run


def add_record(store, uid, day, status="Present", punch_in=(10, 0), punch_out=(19, 0), late=0, overtime=0):
    y, m, d = (int(p) for p in day.split("-"))
    store.collections.setdefault(ATTENDANCE, {})[f"{uid}_{day}"] = {
        "uid": uid,
        "date": day,
        "punch_in": {"time": ist(y, m, d, *punch_in), "lat": 0, "lng": 0},
        "punch_out": {"time": ist(y, m, d, *punch_out), "lat": 0, "lng": 0} if punch_out else None,
        "late_minutes": late,
        "overtime_minutes": overtime,
        "status": status,
    }


def add_holiday(store, day, name, type="holiday"):
    store.collections.setdefault(HOLIDAYS, {})[day] = {"date": day, "name": name, "type": type}


def rows_by_date(report, uid="emp1"):
    sheet = next(s for s in report.sheets if s.uid == uid)
    return {row.date: row for row in sheet.rows}


def test_period_covers_every_day_in_order(reports):
    report = run(reports.generate_monthly_report(2024, 2, "emp1"))
    assert report.start_date == "2024-02-21"
    assert report.end_date == "2024-03-20"
    dates = [row.date for row in report.sheets[0].rows]
    assert len(dates) == 29
    assert dates == sorted(dates)


def test_sunday_without_record(reports):
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-10"]
    assert row.day == "Sun"
    assert row.status == "Sunday"
    assert row.highlight == Highlight.HOLIDAY
    assert row.punch_in == "-"
    assert row.punch_out == "-"


def test_sunday_forced_working_with_attendance(reports, store):
    add_holiday(store, "2024-03-10", "Year-end close", type="working")
    add_record(store, "emp1", "2024-03-10")
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-10"]
    assert row.status == "Present"
    assert row.highlight is None
    assert row.overtime_minutes == 0


def test_missing_working_day_is_absent(reports):
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-04"]
    assert row.status == "Absent"
    assert row.highlight == Highlight.ABSENT


def test_recorded_day_shows_local_times(reports, store):
    add_record(store, "emp1", "2024-03-04", punch_in=(10, 25), punch_out=(19, 40), late=25, overtime=15)
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-04"]
    assert row.punch_in == "10:25 AM"
    assert row.punch_out == "07:40 PM"
    assert row.late_minutes == 25
    assert row.overtime_minutes == 15
    assert row.status == "Present"
    assert row.highlight == Highlight.OVERTIME


def test_still_working_has_no_punch_out(reports, store):
    add_record(store, "emp1", "2024-03-05", status="Working", punch_out=None)
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-05"]
    assert row.punch_out == "-"
    assert row.status == "Working"
    assert row.highlight is None


def test_work_on_named_holiday_is_marked(reports, store):
    add_holiday(store, "2024-03-08", "Maha Shivaratri")
    add_record(store, "emp1", "2024-03-08")
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-08"]
    assert row.status == "Maha Shivaratri (Worked)"
    assert row.highlight == Highlight.OVERTIME


def test_work_on_second_saturday_is_marked(reports, store):
    add_record(store, "emp1", "2024-03-09")
    row = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))["2024-03-09"]
    assert row.status == "Saturday Holiday (Worked)"
    assert row.highlight == Highlight.OVERTIME


def test_half_day_and_absent_records(reports, store):
    add_record(store, "emp1", "2024-03-05", status="Half Day", punch_out=(15, 0))
    add_record(store, "emp1", "2024-03-06", status="Absent", punch_out=(12, 0))
    rows = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))
    assert rows["2024-03-05"].highlight == Highlight.HALF_DAY
    assert rows["2024-03-06"].highlight == Highlight.ABSENT


def test_holidays_outside_period_are_ignored(reports, store):
    add_holiday(store, "2024-04-01", "Outside")
    add_holiday(store, "2024-02-20", "Outside too")
    rows = rows_by_date(run(reports.generate_monthly_report(2024, 2, "emp1")))
    assert "2024-02-20" not in rows
    assert rows["2024-02-21"].status == "Absent"


def test_all_employees_one_sheet_each_by_name(reports, store):
    add_record(store, "emp2", "2024-03-04", status="Present", punch_in=(13, 0), punch_out=(19, 30))
    report = run(reports.generate_monthly_report(2024, 2))
    assert [s.name for s in report.sheets] == ["Admin", "Asha Rao", "Vikram Das"]
    assert report.filename == "Attendance_Report_Feb_21_to_Mar_20.xlsx"
    assert rows_by_date(report, "emp2")["2024-03-04"].status == "Present"
    assert rows_by_date(report, "emp1")["2024-03-04"].status == "Absent"


def test_single_employee_filename(reports):
    report = run(reports.generate_monthly_report(2024, 2, "emp1"))
    assert len(report.sheets) == 1
    assert report.filename == "Asha_Rao_Attendance_Feb.xlsx"


def test_unknown_employee(reports):
    with pytest.raises(RecordNotFound):
        run(reports.generate_monthly_report(2024, 2, "ghost"))


def test_bad_month(reports):
    with pytest.raises(MalformedInput):
        run(reports.generate_monthly_report(2024, 12))


def test_export_needs_admin(reports, emp_token):
    result = run(reports.export_monthly_report(emp_token, 2024, 2))
    assert result["code"] == "Unauthorized"


def test_export_defaults_to_current_period(reports, admin_token):
    # Clock is 4 March 2024 -> period ending 20 March
    result = run(reports.export_monthly_report(admin_token, uid="emp1"))
    assert result["success"] is True
    assert result["filename"] == "Asha_Rao_Attendance_Feb.xlsx"

    wb = load_workbook(BytesIO(base64.b64decode(result["data"])))
    assert wb.sheetnames == ["Asha Rao"]


def test_export_reports_bad_input_as_failure(reports, admin_token):
    result = run(reports.export_monthly_report(admin_token, 2024, 15))
    assert result["success"] is False
    assert result["code"] == "MalformedInput"


def test_report_with_no_employees_still_renders(reports, store):
    store.collections[USERS].clear()
    filename, stream = run(reports.build_report_file(2024, 2))
    assert filename == "Attendance_Report_Feb_21_to_Mar_20.xlsx"
    assert load_workbook(stream).sheetnames == ["Report"]
