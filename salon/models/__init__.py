from .user import User
from .employee import Employee
from .attendance import AttendanceRecord
from .sale import Sale, Expense
from .bonus import Bonus
from .shift import Shift

__all__ = ["User", "Employee", "AttendanceRecord", "Sale", "Expense", "Bonus", "Shift"]
