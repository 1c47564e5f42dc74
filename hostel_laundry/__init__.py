"""
Hostel laundry management service.

Tracks laundry batches through their processing lifecycle, manages
per-block pickup schedules and notifies students when laundry is ready.
"""

__version__ = "1.0.0"
