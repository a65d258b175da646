"""Test suite for the Good Government data pipeline."""
