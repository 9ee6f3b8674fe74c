#!/usr/bin/env python3
from .manager import UIManager
from .theme import PanelTheme

__all__ = ["UIManager", "PanelTheme"]
