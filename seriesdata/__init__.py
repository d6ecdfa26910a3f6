"""Pure series-data transformation package.

This package turns query results that were already grouped into `Series` of
`Point`s into plotting arrays (x/y, error bars, percent shares, text) for a
chart renderer. It must not import Django, fetch data, or render anything.
"""

from .update_data import update_data

__all__ = ["update_data"]
