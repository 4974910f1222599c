"""Asistencia package.

Attendance check-in/check-out web form organized by feature modules
(attendance, reports) with a thin Flask controller layer over
service/repository layers.
"""
