"""Staff Calendar package.

Organized by feature modules (events, assignments, projects, payroll, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
