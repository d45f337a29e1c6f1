"""Shared utilities for lambdaterm."""
