"""Monetary domain package.

This package contains classes for handling monetary amounts and currencies,
including Currency descriptors with their display rules, rounding contexts and
Money calculations with exact precision arithmetic.
"""
