"""Frontends - user interfaces for pish.

Submodules:
    cli/    Command-line entry point and the interactive line editor
"""
