from src.restaurant_staff.restaurant_staff.attendance.factory import AttendanceStrategyFactory
from src.restaurant_staff.restaurant_staff.attendance.strategies.early_strategy import EarlyLeaveStrategy
from src.restaurant_staff.restaurant_staff.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.restaurant_staff.restaurant_staff.attendance.strategies.late_strategy import LateStrategy
from src.restaurant_staff.restaurant_staff.attendance.strategies.normal_strategy import KeepStatusStrategy, OnTimeStrategy
from src.restaurant_staff.restaurant_staff.attendance.strategies.overtime_strategy import OvertimeStrategy
from src.restaurant_staff.restaurant_staff.attendance.timesheet import CheckOutMetrics
from src.restaurant_staff.restaurant_staff.core.enums import AttendanceStatus


def test_factory_checkin_on_threshold_is_on_time():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_checkin(late_minutes=15), OnTimeStrategy)


def test_factory_checkin_past_threshold_is_late():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_checkin(late_minutes=16), LateStrategy)


def test_factory_checkout_priority():
    factory = AttendanceStrategyFactory()

    # overtime beats early leave
    m = CheckOutMetrics(hours_worked=10, overtime_hours=1, early_leave_minutes=45)
    assert isinstance(factory.for_checkout(metrics=m), OvertimeStrategy)

    # early leave beats half day
    m = CheckOutMetrics(hours_worked=3, overtime_hours=0, early_leave_minutes=300)
    assert isinstance(factory.for_checkout(metrics=m), EarlyLeaveStrategy)

    m = CheckOutMetrics(hours_worked=3, overtime_hours=0, early_leave_minutes=30)
    assert isinstance(factory.for_checkout(metrics=m), HalfDayStrategy)

    m = CheckOutMetrics(hours_worked=8.6, overtime_hours=0.5, early_leave_minutes=0)
    assert isinstance(factory.for_checkout(metrics=m), KeepStatusStrategy)


def test_early_leave_decision_carries_minutes_and_keep_status_does_not():
    m = CheckOutMetrics(hours_worked=7, overtime_hours=0, early_leave_minutes=90)

    early = EarlyLeaveStrategy().decide(metrics=m, current=AttendanceStatus.PRESENT)
    keep = KeepStatusStrategy().decide(metrics=m, current=AttendanceStatus.LATE)

    assert early.status == AttendanceStatus.EARLY_LEAVE
    assert early.early_leave_minutes == 90
    assert keep.status == AttendanceStatus.LATE
    assert keep.early_leave_minutes == 0
