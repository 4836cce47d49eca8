"""SISMOG admin console package.

Organized by feature modules (companies, employees, penalties, profiles, ...)
sharing one generic CRUD resource controller (``resources``), with a thin
Flask controller layer over definition/service layers.
"""
