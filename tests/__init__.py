"""
Tests for the plant mesh generator

This package contains validation tests for:
- Genome loading and validation
- Policies and reports
- Core buffers, rings and the mesh finalizer
- Branch, leaf and bridging operations
- End-to-end generation, adapters and CLI
"""
