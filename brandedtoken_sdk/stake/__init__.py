"""
Staking helpers for BrandedToken.
"""
from .gateway_composer import DEFAULT_COMPOSER_GAS, Staker

__all__ = ['Staker', 'DEFAULT_COMPOSER_GAS']
