"""Masked date and time pickers for Textual applications."""
