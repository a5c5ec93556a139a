"""Scheduling domain - availability, calendar grid, blocked dates and emergency reschedules"""
