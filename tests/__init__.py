"""Tests for scanaudit."""
