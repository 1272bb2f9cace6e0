"""Safety Metrics package.

Occupational safety KPI engine organized by feature modules (period, absences,
employees, accidents, indices, trainings, audits, ...) with a thin Flask
controller layer on top of a repository boundary.
"""
