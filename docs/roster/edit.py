edit_roster_description = """
Replace one assignment of an existing roster and recompute its statistics.

### Request Body

- `staff`, `slotTypes`, `config`: Same as for `/roster/generate`
- `schedule`: The roster's day schedules, as returned by `/roster/generate`
- `logs`: The roster's logs (Optional); the edit is appended
- `day`: Day of the assignment to replace
- `slotTypeId`: Slot type of the assignment
- `oldStaffId`: Staff id currently assigned (`EMPTY` for an unfilled position)
- `newStaffId`: Replacement staff id; omit or send `EMPTY` to clear the position

Hard rules are not re-checked; back-to-back shifts caused by the edit are reported in `logs`.

### Errors

- `404`: No matching assignment on that day
- `400`: Unknown replacement staff id
"""
