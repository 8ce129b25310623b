"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the basket pool.

The tests are organized by invariant:
1. conservation.py - Custody double entry, record bounds, fee split, basket round trip
2. atomicity.py - All-or-nothing entry points, flash rollback, re-entrancy

These tests use hypothesis for property-based testing.
"""
