"""
Feature modules for Split Analysis.

Each feature is a self-contained module with:
- models.py - dataclasses
- parser.py - input format parsing
- service.py - Business logic
"""
