"""Errors, logging and runtime paths shared across wdflow."""
