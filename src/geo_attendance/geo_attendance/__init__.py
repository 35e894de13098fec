"""Geo Attendance package.

Organized by feature modules (geofence, enrollment, attendance, ...) with a thin
Flask controller layer over service/repository layers.
"""
