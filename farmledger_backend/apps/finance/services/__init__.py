# apps/finance/services/__init__.py

from .derived_fields import DerivedFieldCalculator

__all__ = ['DerivedFieldCalculator']
