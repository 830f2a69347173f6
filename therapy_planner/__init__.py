"""Therapy session planner backend."""
