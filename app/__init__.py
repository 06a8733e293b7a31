# -*- coding: utf-8 -*-
"""
Rental Manager Application Core Module
"""

from .config import Config

__all__ = ["Config"]
