"""
Repo-level database operations.

Runtime seeding lives in the dashboard service (`GET /seed`). This package wraps the same
seeder as a command line entry point: `python -m db.seed`.
"""
