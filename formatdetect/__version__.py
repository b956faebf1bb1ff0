#!/usr/bin/env python3
"""Version information for formatdetect."""

__version__ = "1.0.0"
__author__ = "Marc Rivero"
__author_email__ = "mriverolopez@gmail.com"
__license__ = "GPL-3.0"
