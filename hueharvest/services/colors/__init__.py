"""
hueharvest Colors Module

Provides pixel sampling, median-cut quantization, hex conversion and the
palette / dominant color operations built on top of them.
"""
