"""
Check driver.
"""

from .driver import CheckDriver, CheckResult

__all__ = ['CheckDriver', 'CheckResult']
