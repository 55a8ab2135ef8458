"""Test-framework adapters for the capture gate.

Adapters are imported explicitly (``capturegate.integrations.pytest_plugin``,
``capturegate.integrations.robot_listener``) so each framework stays optional.
"""
