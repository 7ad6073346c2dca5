"""Time Tracker package.

Feature modules (users, timelog, tracking) follow the same layering:
pure domain models, repository protocols with MySQL adapters, services and a thin
Flask controller.
"""
