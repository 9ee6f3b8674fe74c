#!/usr/bin/env python3
from .shell import Shell

__all__ = ["Shell"]
