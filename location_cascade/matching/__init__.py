"""
Option matching components.
"""

from .option_matcher import OptionMatcher, OptionMatch

__all__ = ['OptionMatcher', 'OptionMatch']
