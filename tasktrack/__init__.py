"""tasktrack - personal task tracker API."""
