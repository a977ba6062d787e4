"""
scribectl - command line tool for the Scribe volume replication operator.
"""

__version__ = "0.1.0"
