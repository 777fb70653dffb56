"""
Browser tests for the signup flow.

They run against a deployed environment and are excluded from the default
pytest run. Select them with `-m e2e`, or use run_suite.py:

    ENV=qa LOCALE=fr pytest tests/e2e -m e2e
    python3 run_suite.py qa all
"""
