"""Slack Upload — share a local file into a Slack channel.

WHY: Release pipelines produce artifacts (builds, screenshots, reports)
that the team wants to see in Slack. Slack's external upload flow needs
three separate API calls; this package wraps them behind one command.

HOW: Three layers — config (token, endpoints), api (httpx client for the
three calls), core (validated request, orchestrator, reporting sinks).
The CLI ties them together.

RULES:
- Upload failures are reported, never raised out of the orchestrator
- The token is never logged or shown in repr()
"""

__version__ = "0.1.0"
