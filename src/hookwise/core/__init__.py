"""Shared configuration, errors, logging and types."""
