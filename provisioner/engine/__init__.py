"""
File resolution, staging, and registration engine.

Each module handles one step of moving a manifest entry between a source
root, the staging directory, and its final location on the build machine.
"""
