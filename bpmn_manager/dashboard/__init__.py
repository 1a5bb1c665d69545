"""Textual dashboard for the BPMN workflow-engine API."""
