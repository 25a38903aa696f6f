#!/usr/bin/env python3
"""
Core data models for redirect resolution.
"""

from .source import Source

__all__ = ['Source']
