"""Shutter Stage: photo post publishing API."""
