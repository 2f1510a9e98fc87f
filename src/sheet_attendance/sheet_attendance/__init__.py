"""Sheet Attendance package.

Event attendance tracking on top of Google Sheets. Organized by feature
modules (attendance, upload, history, users, ...) with a thin Flask controller
layer over service/repository layers.
"""
