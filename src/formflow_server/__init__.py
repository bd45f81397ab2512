"""formflow_server — FastAPI REST API for the formflow SDK.

Hosts one NavigationSession per respondent session handle and exposes
step-by-step interaction (current step, submit, back), form reference
endpoints, and an authoring lint report.
"""
