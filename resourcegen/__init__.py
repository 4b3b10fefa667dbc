"""
Resource codegen — generate resource artifacts from declarative schema files.
"""

__version__ = "0.1.0"
