"""Shared plumbing: errors, logging, HTTP, retry and validation."""
