"""Test suite for the screendoc package.

This package contains unit and integration tests validating document
deserialization, structural validation, shape normalization and the
canonical document model.
"""
