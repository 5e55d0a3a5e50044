"""
core
----

Core roster engine components:

- models & config:
  Immutable staff, slot type, assignment and result records, and the clinical/nursing run configuration.

- DayInfo & build_day_context:
  Calendar facts (weekday, weekend, holiday, unit permissions) shared by all attempts.

- ConstraintManager:
  Register candidate filter rules and apply them in a controlled sequence.

- RosterContext & AttemptState:
  Static inputs of a generation run and the mutable state of a single attempt.

- RunLog:
  Bounded diagnostic log returned with each roster.
"""
