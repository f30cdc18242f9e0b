"""Restaurant staff backend package.

Organized by feature modules (employees, attendance, leave, payroll) with a thin
Flask controller layer on top of service/repository layers.
"""
