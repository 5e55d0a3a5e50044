"""
utils package
-------------

Shared helpers for the roster engine and its API:

- `constants`: Weights, caps and defaults loaded from config/constants.json.
- `day_utils`: Calendar arithmetic (weekdays, month lengths, day priority).
- `staff_utils`: Active staff and roommate lookups.
- `validate`: Input warnings that generation tolerates instead of rejecting.
- `logger`: Service logger writing to stdout and the run-log file.
- `helpers.roster_payload`: Conversion between request schemas and engine records.
"""
