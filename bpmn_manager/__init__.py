"""BPMN Manager — terminal dashboard for a workflow-engine HTTP API."""

__version__ = "1.0.0"
