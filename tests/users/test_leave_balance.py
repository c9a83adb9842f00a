from src.academy_attendance.academy_attendance.users.model import LeaveBalance


def test_debit_from_annual_first():
    assert LeaveBalance(5, 3).debit(2) == LeaveBalance(3, 3)


def test_debit_spills_over_to_monthly():
    assert LeaveBalance(2, 5).debit(3) == LeaveBalance(0, 4)


def test_debit_floors_at_zero():
    assert LeaveBalance(0, 1).debit(3) == LeaveBalance(0, 0)


def test_debit_exact_total():
    b = LeaveBalance(1, 2).debit(3)
    assert b == LeaveBalance(0, 0)
    assert b.total == 0


def test_debit_zero_days_keeps_balance():
    assert LeaveBalance(4, 4).debit(0) == LeaveBalance(4, 4)
