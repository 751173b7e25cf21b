"""
Build Version.

Release builds overwrite VERSION; everything else reports "dev".
"""

VERSION = "dev"
