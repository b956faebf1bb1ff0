#!/usr/bin/env python3
"""
formatdetect CLI Package

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

from .batch_discovery import find_files_to_process
from .display import console, display_json, display_results, print_banner
from .runner import FileReport, build_detector, run_detection
from .validators import validate_input_mode, validate_inputs

__all__ = [
    "FileReport",
    "build_detector",
    "console",
    "display_json",
    "display_results",
    "find_files_to_process",
    "print_banner",
    "run_detection",
    "validate_input_mode",
    "validate_inputs",
]
