""" Invoke tasks. """
import io
import json
import os
import sys
from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')


@task
def install(c):
    c.run('pip install -e ".[test,dev]"')


@task
def serve(c, port=8001):
    """Run the API with auto-reload."""
    c.run(f"uvicorn main:app --reload --host 127.0.0.1 --port {port}", env={"PYTHONUTF8": "1"})


@task
def test(c):
    c.run("pytest -q", env={"PYTHONUTF8": "1"})


@task(help={
    "payload": "JSON file shaped like a POST /api/roster/generate body",
    "out": "CSV file for the staff x date table (printed when omitted)",
})
def roster(c, payload, out=None):
    """Generate a roster from a request file without starting the API."""
    from scheduler.builder import generate_roster
    from scheduler.extractor import extract_schedule_and_summary
    from schemas.roster.generate import GenerateRosterRequest
    from utils.helpers.roster_payload import to_config, to_previous_schedule, to_slot_types, to_staff

    with open(payload, "r", encoding="utf-8") as f:
        request = GenerateRosterRequest.model_validate(json.load(f))

    staff = to_staff(request.staff)
    slot_types = to_slot_types(request.slotTypes)
    config = to_config(request.config)
    previous = to_previous_schedule(request.previousSchedule, config.year, config.month)

    result = generate_roster(staff, slot_types, config, previous or None)
    table_df, summary_df, metrics = extract_schedule_and_summary(result, staff, slot_types, config)

    if out:
        table_df.to_csv(out, encoding="utf-8")
        print(f"Roster table written to {out}")
    else:
        print(table_df.to_string())
    print(summary_df.to_string(index=False))
    print(json.dumps(metrics, indent=2, default=str))


@task
def clean(c):
    """
    Cross-platform clean task to remove all __pycache__ folders and .pyc files.
    """
    if os.name == 'nt':  # Windows
        c.run("for /R %f in (*.pyc) do del /F /Q \"%f\"", warn=True)
        c.run('for /d /r %d in (__pycache__) do @if exist "%d" rmdir /s /q "%d"', warn=True)
    else:  # Unix/Linux/macOS
        c.run("find . -type f -name '*.pyc' -delete", warn=True)
        c.run("find . -type d -name '__pycache__' -exec rm -r {} +", warn=True)
        c.run("rm -rf .pytest_cache", warn=True)
