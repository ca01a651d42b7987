"""
Report package: renderers for allocation grids.
"""
