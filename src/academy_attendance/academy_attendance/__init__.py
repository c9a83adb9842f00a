"""Academy Attendance package.

Organized by feature modules (periods, attendance, schedules, cancellations, ...)
with a thin Flask controller layer over plain service/repository layers.
"""
