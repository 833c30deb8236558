"""Clinic domain models."""
