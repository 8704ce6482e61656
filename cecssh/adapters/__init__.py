"""
Adapters layer: configuration files, environment, command line
"""
