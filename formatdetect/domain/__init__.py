#!/usr/bin/env python3
"""Domain models shared by the detector, the catalog loader and the CLI."""

from .formats import DetectionPolicy, FormatDefinition, Signature
from .inputs import BufferInput, InputDescriptor, PathInput, ResourceInput

__all__ = [
    "DetectionPolicy",
    "FormatDefinition",
    "Signature",
    "BufferInput",
    "InputDescriptor",
    "PathInput",
    "ResourceInput",
]
