"""Shared utilities for xacml-pep."""
