"""Audit report generation."""
