# apps/farmers/services/__init__.py

from .farmer_profile_service import FarmerProfileService

__all__ = ['FarmerProfileService']
