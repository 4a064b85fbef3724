"""Utility helpers for avyquery."""
