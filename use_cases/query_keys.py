"""Cache keys shared by the pages that read and the mutations that invalidate them."""

REGISTRATION_REQUESTS = ("registration-requests",)
ADMIN_STUDENTS = ("admin-students",)
STUDENTS = ("students",)
DELETION_REQUESTS = ("deletion-requests",)
LATE_ABSENCE_REQUESTS = ("late-absence-requests",)
EARLY_ABSENCE_REQUESTS = ("early-absence-requests",)
CUTOFF_TIME = ("cutoff-time",)
ALL_SETTINGS = ("all-settings",)
ATTENDANCE_HISTORY = ("attendance-history",)
STUDENT_DASHBOARD = ("student-dashboard",)
EXPENSES = ("expenses",)
STUDENT_PHOTO = ("student-photo",)


def attendance_history(months: int) -> tuple:
    return ATTENDANCE_HISTORY + (months,)


def student_photo(filename: str) -> tuple:
    return STUDENT_PHOTO + (filename,)
