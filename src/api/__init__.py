"""
HTTP API for the Departure Timetable Optimizer.
"""
