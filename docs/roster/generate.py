generate_roster_description = """
Generate a monthly duty roster for the given staff and slot types.

The engine never breaks the hard rules (eligibility, off days, no back-to-back shifts,
roommates and the daily senior cap for nursing rosters) and optimizes quotas, requests
and fairness heuristically. Slots that cannot be staffed are returned as `EMPTY`
assignments and counted in `unfilledSlots`.

### Request Body

- `staff`: List of `StaffProfile` objects:
    - `id`: Primary key of the staff member
    - `name`: Display name
    - `tier`: Seniority tier, 1 is the most senior (also accepted as `role`)
    - `group`: Clinical group (default "General")
    - `quotaService`: Target regular shifts (nursing: target shifts overall)
    - `quotaEmergency`: Target emergency shifts (clinical)
    - `weekendLimit`: Maximum weekend shifts
    - `offDays` / `requestedDays`: Days of month
    - `isActive`: Inactive staff are ignored
    - `unit`, `specialty`, `room`: Nursing extras

- `slotTypes`: List of `SlotTypeSpec` objects:
    - `id`, `name`
    - `minDailyCount` / `maxDailyCount`: Staffing range per day
    - `allowedTiers`: Eligible tiers (clinical)
    - `allowedUnits`: Eligible units (nursing, empty admits everyone)
    - `priorityTiers`: Tiers preferred for this slot
    - `requiredGroup`: Required group or unit ("Any" for none)
    - `isEmergency`: Emergency slot (clinical)

- `config`: Run settings, tagged by `profile`:
    - common: `year`, `month`, `maxRetries`, `randomizeOrder`, `preventEveryOtherDay`,
      `holidays`, `numDays`, `seed`, `workers`
    - `"clinical"`: `useFatigueModel`, `useGeneticAlgorithm`, `populationSize`,
      `generations`, `elitismCount`, `crossoverRate`
    - `"nursing"`: `unitConstraints` (`unit`, `allowedWeekdays` with 0 = Monday),
      `dailyTotalTarget`

- `previousSchedule`: Last days of the previous month's roster (Optional), used to avoid
  a shift on day 1 right after a shift on the previous month's last day.

### Response

- `schedule`: Day schedules with their assignments
- `unfilledSlots`: Number of `EMPTY` assignments
- `stats`: Shift counts per staff member
- `logs`: Diagnostic lines (at most 1000)
- `fitness`: Genetic fitness (genetic mode only)
- `summary`: Per-staff table including quota deviation
- `table`: Staff x date grid of slot names
- `metrics`: Unfilled slots per day and totals
"""
