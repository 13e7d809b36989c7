"""Field Attendance package.

Feature modules (users, tokens, attendance, audit, reports) each carry their
own model/repository/service layers, with a thin Flask controller on top.
"""
