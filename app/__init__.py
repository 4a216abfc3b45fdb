"""
Command line front end for the projection engine.
"""
