# -*- coding: utf-8 -*-
from decimal import Decimal

from conftest import day, employee

from salon.attendance_times import late_minutes_for, time_to_minutes, work_hours_between
from salon.payroll.attendance import aggregate_attendance, month_records, normalize_status

MARCH = 2  # месяцы с нуля


def test_counts_by_status():
    records = [
        day(status="present", work_hours="8"),
        day(status="late", work_hours="8", late_minutes=15),
        day(status="absent"),
        day(status="leave"),
        day(status="late", late_minutes="5"),
    ]
    att = aggregate_attendance(records, employee(), MARCH, 2024)
    assert att.present_days == 3
    assert att.late_days == 2
    assert att.absent_days == 1
    assert att.leave_days == 1
    assert att.total_late_minutes == 20
    assert att.total_work_hours == Decimal("16")


def test_filters_other_employees_and_months():
    records = [
        day(employee_id=1, d="2024-03-01", work_hours="8"),
        day(employee_id=2, d="2024-03-01", work_hours="8"),
        day(employee_id=1, d="2024-04-01", work_hours="8"),
        day(employee_id="1", d="2024-03-31", work_hours="4"),
    ]
    att = aggregate_attendance(records, employee(id=1), MARCH, 2024)
    assert att.present_days == 2
    assert att.total_work_hours == Decimal("12")
    assert len(month_records(records, 1, MARCH, 2024)) == 2


def test_overtime_is_per_record():
    records = [day(work_hours="10"), day(work_hours="6"), day(work_hours="9.5")]
    att = aggregate_attendance(records, employee(shift_hours=8), MARCH, 2024)
    # 2 + 0 + 1.5, недоработка одного дня не гасит переработку другого
    assert att.overtime_hours == Decimal("3.5")
    assert att.total_work_hours == Decimal("25.5")


def test_all_hours_are_overtime_without_shift_length():
    e = employee(salary_type="hourly", hourly_rate=40, shift_hours=0)
    att = aggregate_attendance([day(work_hours="5")], e, MARCH, 2024)
    assert att.overtime_hours == Decimal("5")


def test_malformed_numbers_count_as_zero():
    records = [
        day(status="late", work_hours="abc", late_minutes="n/a"),
        day(work_hours=None),
        day(work_hours="7,5"),
    ]
    att = aggregate_attendance(records, employee(), MARCH, 2024)
    assert att.total_late_minutes == 0
    assert att.total_work_hours == Decimal("7.5")
    assert att.present_days == 3


def test_late_minutes_only_from_late_records():
    records = [day(status="present", late_minutes=30), day(status="late", late_minutes=10)]
    att = aggregate_attendance(records, employee(), MARCH, 2024)
    assert att.total_late_minutes == 10


def test_arabic_status_labels():
    assert normalize_status("حاضر") == "present"
    assert normalize_status("تأخير") == "late"
    assert normalize_status("متأخر") == "late"
    assert normalize_status("غائب") == "absent"
    assert normalize_status("إجازة") == "leave"
    assert normalize_status(" Present ") == "present"
    records = [day(status="متأخر", late_minutes=7), day(status="غائب")]
    att = aggregate_attendance(records, employee(), MARCH, 2024)
    assert (att.present_days, att.late_days, att.absent_days, att.total_late_minutes) == (1, 1, 1, 7)


def test_time_helpers():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("2024-03-05T18:15:00.000Z") == 1095
    assert time_to_minutes("25:00") is None
    assert time_to_minutes("") is None
    assert time_to_minutes(None) is None


def test_late_minutes_for():
    assert late_minutes_for("late", "09:20", None, "09:00") == 20
    assert late_minutes_for("late", "09:20", 5, "09:00") == 5
    assert late_minutes_for("present", "09:20", None, "09:00") == 0
    assert late_minutes_for("late", "08:50", None, "09:00") == 0
    assert late_minutes_for("late", "", None, "09:00") == 0
    assert late_minutes_for("late", "09:20", "1e999999999", "09:00") == 24 * 60
    assert late_minutes_for("late", "09:20", "-30", "09:00") == 20


def test_work_hours_between():
    assert work_hours_between("09:00", "17:30") == Decimal("8.5")
    assert work_hours_between("18:00", "09:00") is None
    assert work_hours_between("09:00", "") is None


def test_implausible_late_minutes_are_capped():
    records = [day(status="late", late_minutes="1e999999999"), day(status="late", late_minutes=-15)]
    att = aggregate_attendance(records, employee(), MARCH, 2024)
    assert att.total_late_minutes == 24 * 60
    assert att.late_days == 2
