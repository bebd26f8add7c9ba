"""Test suite for clippy."""
