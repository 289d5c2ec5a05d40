"""Data models for bhelm."""
