from database import HOLIDAYS, USERS
from models.employee import EmployeeProfileUpdate, Role

from conftest import run


def test_admin_adds_and_replaces_holiday(holidays, store, admin_token):
    result = run(holidays.upsert_holiday(admin_token, "2024-03-25", "Holi"))
    assert result == {"success": True, "message": "Holiday added/updated"}
    assert store.collections[HOLIDAYS]["2024-03-25"] == {"date": "2024-03-25", "name": "Holi", "type": "holiday"}

    run(holidays.upsert_holiday(admin_token, "2024-03-25", "Audit day", "working"))
    assert store.collections[HOLIDAYS]["2024-03-25"]["type"] == "working"


def test_holiday_changes_need_admin(holidays, emp_token):
    assert run(holidays.upsert_holiday(emp_token, "2024-03-25", "Holi"))["code"] == "Unauthorized"
    assert run(holidays.delete_holiday(emp_token, "2024-03-25"))["code"] == "Unauthorized"


def test_holiday_input_is_validated(holidays, admin_token):
    assert run(holidays.upsert_holiday(admin_token, "25-03-2024", "Holi"))["code"] == "MalformedInput"
    assert run(holidays.upsert_holiday(admin_token, "2024-03-25", "Holi", "vacation"))["code"] == "MalformedInput"


def test_delete_holiday(holidays, store, admin_token):
    run(holidays.upsert_holiday(admin_token, "2024-03-25", "Holi"))
    assert run(holidays.delete_holiday(admin_token, "2024-03-25"))["success"] is True
    assert "2024-03-25" not in store.collections[HOLIDAYS]
    assert run(holidays.delete_holiday(admin_token, "2024-03-25"))["code"] == "RecordNotFound"


def test_list_holidays_newest_first(holidays, admin_token, emp_token):
    run(holidays.upsert_holiday(admin_token, "2024-01-26", "Republic Day"))
    run(holidays.upsert_holiday(admin_token, "2024-08-15", "Independence Day"))
    result = run(holidays.list_holidays(emp_token))
    assert [h["date"] for h in result["holidays"]] == ["2024-08-15", "2024-01-26"]


def test_list_employees_sorted(employees, admin_token, emp_token):
    assert run(employees.list_employees(emp_token))["code"] == "Unauthorized"
    result = run(employees.list_employees(admin_token))
    assert [e["name"] for e in result["employees"]] == ["Admin", "Asha Rao", "Vikram Das"]


def test_admin_sets_employee_shift(employees, store, admin_token):
    data = EmployeeProfileUpdate(name="Asha Rao", email="asha@example.com", shift="10:30")
    assert run(employees.upsert_profile(admin_token, "emp1", data))["success"] is True
    assert store.collections[USERS]["emp1"]["shift"] == "10:30"
    assert store.collections[USERS]["emp1"]["role"] == Role.EMPLOYEE.value


def test_shift_label_is_validated(employees, admin_token):
    data = EmployeeProfileUpdate(name="Asha Rao", shift="half past ten")
    assert run(employees.upsert_profile(admin_token, "emp1", data))["code"] == "MalformedInput"


def test_my_profile(employees, emp_token):
    assert run(employees.get_my_profile(emp_token))["profile"]["name"] == "Asha Rao"
