"""Multidimensional views over flat sequences: extents, layouts, accessors, sub-view slicing and simple kernels."""

__version__ = "0.1.0"