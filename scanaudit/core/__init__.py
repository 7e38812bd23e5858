"""
Core components for the check manager.

Contains:
- Data models (Issue, Page, CheckInfo)
- Base class for checks
- Check registry and platform validation
- Scheduler, gate and result registry
"""
