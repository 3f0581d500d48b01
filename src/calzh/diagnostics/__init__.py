"""Diagnostics package.

- pretty_month, new_years_table: plain-text tables, no extras needed
- leap_months, new_moon_drift: need the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["pretty_month", "new_years_table", "leap_months", "new_moon_drift"]
