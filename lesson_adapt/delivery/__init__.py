"""
Terminal rendering for lesson-adapt results.

Components:
- render_result: Full result view (analysis, decision, reasons, tutor insight)
- render_policy_table: Active decision policy
"""
from lesson_adapt.delivery.result_view import render_policy_table, render_result

__all__ = ["render_policy_table", "render_result"]
